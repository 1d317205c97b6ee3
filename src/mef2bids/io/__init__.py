"""Loading of source metadata and writing of sidecar files."""
