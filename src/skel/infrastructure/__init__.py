"""Infrastructure layer — KDL document access and filesystem helpers."""
