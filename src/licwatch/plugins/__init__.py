"""Plugin system — pluggy hook specifications and manager."""
