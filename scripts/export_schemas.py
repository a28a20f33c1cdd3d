"""Export JSON schemas for Paper and ComposedDocument."""

import json
from pathlib import Path

from scholargen.models import ComposedDocument, Paper


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Persisted record shape (camelCase aliases)
    paper_schema = Paper.model_json_schema(by_alias=True)
    paper_path = schemas_dir / "Paper.schema.json"
    with open(paper_path, "w") as f:
        json.dump(paper_schema, f, indent=2)
    print(f"Exported Paper schema to {paper_path}")

    # Render response shape
    document_schema = ComposedDocument.model_json_schema()
    document_path = schemas_dir / "ComposedDocument.schema.json"
    with open(document_path, "w") as f:
        json.dump(document_schema, f, indent=2)
    print(f"Exported ComposedDocument schema to {document_path}")


if __name__ == "__main__":
    main()
