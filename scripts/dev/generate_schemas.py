"""Generate JSON Schemas for integration metadata, manifests and validation policies."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from mercy_kit.models import IntegrationMetadata, PackageManifest
from mercy_kit.policy.models import ValidationPolicy

SCHEMAS = {
    "mercy-integration.schema.json": IntegrationMetadata,
    "manifest.schema.json": PackageManifest,
    "policy.schema.json": ValidationPolicy,
}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("docs"),
        help="Directory to write the generated JSON schemas to.",
    )
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    for filename, model in SCHEMAS.items():
        schema = model.model_json_schema(by_alias=True)
        output_path = args.output_dir / filename
        output_path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")
        print(f"Wrote {model.__name__} schema to {output_path}")


if __name__ == "__main__":
    main()
