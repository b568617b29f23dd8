"""
Export the store service OpenAPI schema.

The storefront generates its TypeScript types from this file.

Usage:
    python scripts/generate_openapi.py [output.json]
"""

import json
import os
import sys

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from services.store_service.app.main import app


def main():
    output = sys.argv[1] if len(sys.argv) > 1 else "openapi.json"
    schema = app.openapi()

    with open(output, "w", encoding="utf-8") as fh:
        json.dump(schema, fh, indent=2)

    print(f"OpenAPI schema written to {output}")
    print(f"   - {len(schema.get('paths', {}))} paths")
    print(f"   - {len(schema.get('components', {}).get('schemas', {}))} schemas")


if __name__ == "__main__":
    main()
