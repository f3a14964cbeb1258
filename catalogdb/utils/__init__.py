"""Small helpers shared by the store (JSON file I/O, date parsing)."""
