"""
Audit Use Cases

Audit log queries, statistics and maintenance.
"""

from .apply_retention_policy_use_case import ApplyRetentionPolicyUseCase, RetentionResponse
from .archive_audit_logs_use_case import ArchiveAuditLogsUseCase, ArchiveResponse
from .get_audit_log_use_case import GetAuditLogUseCase
from .get_audit_logs_use_case import GetAuditLogsUseCase
from .get_audit_statistics_use_case import GetAuditStatisticsUseCase
from .get_recent_activity_use_case import GetRecentActivityUseCase
from .get_storage_stats_use_case import GetStorageStatsUseCase, StorageStats
from .get_user_activity_use_case import GetUserActivityUseCase
from .optimize_indexes_use_case import OptimizeIndexesUseCase
from .run_audit_maintenance_use_case import MaintenanceResponse, RunAuditMaintenanceUseCase

__all__ = [
    "ApplyRetentionPolicyUseCase",
    "RetentionResponse",
    "ArchiveAuditLogsUseCase",
    "ArchiveResponse",
    "GetAuditLogUseCase",
    "GetAuditLogsUseCase",
    "GetAuditStatisticsUseCase",
    "GetRecentActivityUseCase",
    "GetStorageStatsUseCase",
    "StorageStats",
    "GetUserActivityUseCase",
    "OptimizeIndexesUseCase",
    "MaintenanceResponse",
    "RunAuditMaintenanceUseCase",
]
