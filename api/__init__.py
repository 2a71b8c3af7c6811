"""
api
===

FastAPI application exposing the milestone calculator and recovery circles.
"""
