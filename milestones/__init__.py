"""
Milestones
==========

A lightweight toolkit for computing recovery milestones from a sobriety
date and for keeping track of a customer's *recovery circle*.

Import structure
----------------
`import milestones` is intentionally cheap: none of the sub‑modules are
imported by default.  Persistence (*sqlmodel*) is only pulled in when you
explicitly access :pymod:`milestones.db` or :pymod:`milestones.circle_db`.

Sub‑modules
~~~~~~~~~~~
- :pymod:`milestones.models`      – result / catalog dataclasses
- :pymod:`milestones.catalog`     – the fixed, ordered ``MILESTONES`` tuple
- :pymod:`milestones.calculator`  – ``calculate_milestones`` (pure)
- :pymod:`milestones.circle`      – recovery‑circle milestones, validation, roster
- :pymod:`milestones.circle_db`   – SQLite‑backed roster (``DBCircleManager``)
- :pymod:`milestones.cli`         – ``milestones`` command

Quick start
-----------
>>> from datetime import date, datetime
>>> from milestones.calculator import calculate_milestones
>>> res = calculate_milestones(date(2024, 1, 1), now=datetime(2024, 1, 2))
>>> res.next.milestone.label
'1 Week'

"""

__all__ = [
    "models",
    "catalog",
    "calculator",
    "circle",
    "circle_db",
    "cli",
]

__version__ = "0.1.0"
