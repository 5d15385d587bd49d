"""outdir command handlers."""
