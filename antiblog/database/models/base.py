"""
Declarative Base
----------------

Every Antiblog table is mapped on ``Base``; ``Base.metadata`` is what
``AntiblogDB.initialize_schema`` creates.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base of the entry, alias, tag, series and feed tables."""
