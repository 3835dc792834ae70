#!/usr/bin/env python
"""
Validates the srt-web-translator package structure and optional tooling.

Runs under pytest, or standalone: python test_package.py
"""
import sys
import importlib
import os

import pytest

# Define required modules
required_modules = [
    "srt_web_translator",
    "srt_web_translator.errors",
    "srt_web_translator.srt_io",
    "srt_web_translator.markup",
    "srt_web_translator.quality",
    "srt_web_translator.config",
    "srt_web_translator.events",
    "srt_web_translator.status",
    "srt_web_translator.publish",
    "srt_web_translator.browser",
    "srt_web_translator.pipeline",
    "srt_web_translator.media",
    "srt_web_translator.files",
    "srt_web_translator.install",
    "srt_web_translator.cli",
]

# Define required classes
required_classes = [
    ("srt_web_translator.srt_io", "SubtitleEntry"),
    ("srt_web_translator.publish", "LocalPublishTarget"),
    ("srt_web_translator.publish", "RemotePublishTarget"),
    ("srt_web_translator.browser", "BrowserSession"),
    ("srt_web_translator.pipeline", "TranslationPipeline"),
    ("srt_web_translator.config", "TranslatorConfig"),
]

# Define required functions
required_functions = [
    ("srt_web_translator.srt_io", "parse_srt"),
    ("srt_web_translator.srt_io", "serialize_srt"),
    ("srt_web_translator.markup", "render_markup"),
    ("srt_web_translator.markup", "extract_entries"),
    ("srt_web_translator.browser", "verify_live"),
    ("srt_web_translator.browser", "extract_translated"),
    ("srt_web_translator.pipeline", "translate_file"),
    ("srt_web_translator.media", "extract_subtitles"),
    ("srt_web_translator.media", "list_subtitle_streams"),
    ("srt_web_translator.media", "check_ffmpeg_available"),
]


def check_module(module_name):
    """Check if a module can be imported."""
    try:
        importlib.import_module(module_name)
        return True
    except ImportError as e:
        return False, str(e)


def check_attribute(module_name, attr_name):
    """Check if a module has a specific attribute (class or function)."""
    try:
        module = importlib.import_module(module_name)
        return hasattr(module, attr_name)
    except ImportError:
        return False


def check_playwright_browser():
    """Check if a Playwright Chromium build is installed."""
    try:
        from playwright.sync_api import sync_playwright
    except ImportError:
        return False
    try:
        with sync_playwright() as p:
            return bool(p.chromium.executable_path) and os.path.exists(p.chromium.executable_path)
    except Exception:
        return False


@pytest.mark.parametrize("module_name", required_modules)
def test_module_imports(module_name):
    assert check_module(module_name) is True


@pytest.mark.parametrize("module_name,attr_name", required_classes + required_functions)
def test_public_attribute(module_name, attr_name):
    assert check_attribute(module_name, attr_name)


def test_exports_match_all():
    package = importlib.import_module("srt_web_translator")
    missing = [name for name in package.__all__ if not hasattr(package, name)]
    assert missing == []


def main():
    """Run all validation checks."""
    print("SRT Web Translator - Package Validation")
    print("=======================================")

    python_version = sys.version.split()[0]
    print(f"Python Version: {python_version}")

    print("\nChecking Package Modules:")
    all_modules_ok = True
    for module in required_modules:
        result = check_module(module)
        if result is True:
            print(f"  ✓ {module}")
        else:
            print(f"  ✗ {module}: {result[1]}")
            all_modules_ok = False

    if not all_modules_ok:
        print("\n⚠️  Some package modules are missing. Please reinstall the package.")
        return False

    print("\nChecking Required Classes and Functions:")
    all_attributes_ok = True
    for module_name, attr_name in required_classes + required_functions:
        if check_attribute(module_name, attr_name):
            print(f"  ✓ {module_name}.{attr_name}")
        else:
            print(f"  ✗ {module_name}.{attr_name}")
            all_attributes_ok = False

    print("\nChecking External Tools:")
    from srt_web_translator.media import check_ffmpeg_available
    if check_ffmpeg_available():
        print("  ✓ FFmpeg")
    else:
        print("  ⚠️  FFmpeg - Not found (only needed for media files).")

    if check_playwright_browser():
        print("  ✓ Playwright Chromium")
    else:
        print("  ✗ Playwright Chromium - run: playwright install chromium")

    print("\nValidation Summary:")
    if all_modules_ok and all_attributes_ok:
        print("✅ Package structure is valid.")
        return True
    print("❌ Package structure has issues.")
    return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
