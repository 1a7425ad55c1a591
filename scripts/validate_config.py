#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gbce_app.config.loader import ConfigLoader
from gbce_app.config.validation import ConfigValidator
from gbce_app.errors import InvalidArgumentError


def main():
    """Main validation function."""
    print("🔍 Validating GBCE configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    print(f"\n📊 Validating settings in {loader.config_dir}...")
    errors = ConfigValidator.validate_config(loader.merge_config())
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        all_valid = False
    else:
        print("✅ Settings are valid")

    print("\n📋 Validating instrument table...")
    try:
        instruments = loader.load_instruments()
        print(f"✅ {len(instruments)} instruments: {', '.join(i.symbol for i in instruments)}")
    except InvalidArgumentError as e:
        print(f"❌ {e.message}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
