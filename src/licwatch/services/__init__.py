"""Service layer — operations over the host, returning ServiceResult."""
