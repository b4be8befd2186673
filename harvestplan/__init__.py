"""Forward state-space planning for resource-gathering workers."""
