from codepoet.services.sync.connectivity import ConnectivityService, connectivity_service
from codepoet.services.sync.sync_coordinator import (
    RemoteRecordStore,
    SkipReason,
    SyncCoordinator,
    SyncResult,
    SyncStatus,
)

__all__ = [
    "ConnectivityService",
    "connectivity_service",
    "RemoteRecordStore",
    "SkipReason",
    "SyncCoordinator",
    "SyncResult",
    "SyncStatus",
]
