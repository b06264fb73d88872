"""Projects and tasks REST API."""
