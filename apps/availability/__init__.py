"""Peak-season rates and non-availability periods per room."""
