"""outdir test suite."""
