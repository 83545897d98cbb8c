"""
Use Cases

Organized into domain folders:
- audit/: Audit log queries and maintenance
- scheduled_notifications/: Scheduling, dispatch, producers and cron jobs
- notifications/: Live notifications of an employee
- entities/: Audited create/update/delete of business entities

Import from subdirectories.
"""
