"""Pages of the photowall UI."""
