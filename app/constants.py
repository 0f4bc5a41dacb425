"""
Service-wide constants
"""

SERVICE_NAME = "attendance-tracker"
DEFAULT_VERSION = "1.0.0"

# Export file names: attendance_report_<from>_<to>.csv
ATTENDANCE_REPORT_PREFIX = "attendance_report"
