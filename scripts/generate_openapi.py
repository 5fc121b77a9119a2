#!/usr/bin/env python3
"""
Generate OpenAPI specification from FastAPI app.

Usage:
    python scripts/generate_openapi.py [output_path]

Output:
    docs/api/openapi.json (default)
"""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tracker.main import create_app


def main():
    """Generate and save OpenAPI spec."""
    app = create_app()
    openapi_schema = app.openapi()

    if len(sys.argv) > 1:
        output_path = Path(sys.argv[1])
    else:
        output_path = Path(__file__).parent.parent / "docs" / "api" / "openapi.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(openapi_schema, f, indent=2)

    print(f"✅ OpenAPI spec generated: {output_path}")
    print(f"   - {len(openapi_schema.get('paths', {}))} endpoints documented")
    print(f"   - {len(openapi_schema.get('components', {}).get('schemas', {}))} schemas defined")


if __name__ == "__main__":
    main()
