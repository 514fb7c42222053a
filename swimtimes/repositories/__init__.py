"""Repository layer for data persistence.

Repositories encapsulate data access logic and provide a clean interface
for the service layer.
"""

from swimtimes.repositories.snapshot_repo import SnapshotRepository

__all__ = [
    "SnapshotRepository",
]
