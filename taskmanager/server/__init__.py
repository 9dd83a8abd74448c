"""
Task Manager Server Package.

This package contains the web server implementation for the task manager.
It includes the API definition, site pages, dependencies and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configurations and constants.
    services: Account logic, authentication dependencies and upload checks.
    site: Rendered pages and the weather lookup endpoint.
"""
