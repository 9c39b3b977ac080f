"""Application layer: orchestration services and their ports."""
