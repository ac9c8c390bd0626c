"""
Antiblog
--------
Data engine of a small publishing platform: ranked entries, rotation,
aliases, tags, series, a bounded recency feed and paginated views.
"""
from antiblog.core.profile import Profile
from antiblog.database.manager import AntiblogDB

__version__ = "1.0.0"

__all__ = ["AntiblogDB", "Profile", "__version__"]
