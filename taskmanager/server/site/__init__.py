"""Server-rendered site pages and the weather proxy endpoint."""
