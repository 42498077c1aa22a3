"""Service layer — layer loading, merging, and dependency resolution."""
