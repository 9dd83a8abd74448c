"""Task Manager.

A small collection of course applications bundled as one package:

- ``taskmanager.notes``: a JSON-file-backed notes store used by the CLI.
- ``taskmanager.weather``: a client that geocodes an address and fetches the
  current weather for it.
- ``taskmanager.server``: a FastAPI application serving the weather site pages
  and the task manager REST API (users, tasks, admin, uploads).
- ``taskmanager.cli``: the ``taskmanager`` command line entry point.
"""

__version__ = "1.1.0"
