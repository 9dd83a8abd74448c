"""Static values shared by the server modules."""

PROJECT_NAME = "Task Manager"
API_V1_STR = "/api/v1"
VERSION = "1.1.0"
SCHEMA_VERSION = "v1"
