"""Global pytest configuration."""

import os

# Keep tests off real backends before any settings are read
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DIAGRAM_ENGINE", "kroki")
os.environ.setdefault("KROKI_URL", "http://kroki.invalid")
os.environ["OPENAI_API_KEY"] = ""
