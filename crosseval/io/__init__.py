"""Input/output: event tables, histogram files and model artifacts."""
