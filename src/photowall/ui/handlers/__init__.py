"""State-changing handlers behind the photowall UI."""
