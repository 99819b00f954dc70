"""Runtime support shared by the rest of the package."""
