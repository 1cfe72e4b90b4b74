"""Host toolkit adapters for the editor surface."""
