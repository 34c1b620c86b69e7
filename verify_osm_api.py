#!/usr/bin/env python3
"""
Verification script for the osmgest OSM API setup.

This script checks:
1. Environment variables (API URL, version, token)
2. The server answers /api/versions with a supported version
3. The access token is accepted (optional)
"""

import argparse
import logging
import sys

import requests

from osmgest import OsmApiClient, OsmGestError
from osmgest.utils.config import (
    load_config,
    osm_access_token,
    osm_api_url,
    osm_api_version,
)
from osmgest.utils.logger import setup_logger


def check_env_vars() -> tuple[bool, list[str]]:
    """Report the effective configuration. Only the URL is mandatory."""
    results = []
    all_ok = True

    url = osm_api_url()
    version = osm_api_version()
    token = osm_access_token()

    if url.startswith(("http://", "https://")):
        results.append(f"[OK] OSM API URL: {url}")
    else:
        results.append(f"[X] OSM_API_URL is not an http(s) URL: {url!r}")
        all_ok = False

    results.append(f"[OK] OSM API version: {version}")

    if token:
        results.append(f"[OK] OSM_ACCESS_TOKEN is set: {token[:6]}...")
    else:
        results.append("[!] OSM_ACCESS_TOKEN is not set (read-only endpoints only)")

    return all_ok, results


def check_versions(client: OsmApiClient) -> tuple[bool, str]:
    """Check the server lists the configured API version."""
    try:
        data = client.versions()
    except (requests.RequestException, OsmGestError) as e:
        return False, f"[X] Error connecting to OSM API: {e}"

    if not isinstance(data, dict):
        return False, f"[X] Unexpected /versions response: {type(data).__name__}"
    versions = [str(v) for v in data.get("api", {}).get("versions", [])]
    if client.api_version in versions:
        return True, f"[OK] Server supports API {client.api_version} (available: {', '.join(versions)})"
    return False, f"[X] Server does not list API {client.api_version} (available: {', '.join(versions) or 'none'})"


def check_token(client: OsmApiClient) -> tuple[bool, str]:
    """Optionally check the token by fetching the authenticated user."""
    if not osm_access_token():
        return False, "[!] Skipping token check (OSM_ACCESS_TOKEN not set)"
    try:
        data = client.get_current_user()
    except (requests.RequestException, OsmGestError) as e:
        return False, f"[X] Error fetching user details: {e}"

    if isinstance(data, dict) and "user" in data:
        name = data["user"].get("display_name", "?")
        return True, f"[OK] Token accepted, logged in as {name}"
    status = getattr(data, "status_code", None)
    if status == 401:
        return False, "[X] Token rejected (401 Unauthorized)"
    return False, f"[X] Unexpected user details response (status {status})"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify the osmgest OSM API setup.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every dispatched request (DEBUG level) to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None):
    """Run all verification checks."""
    args = parse_args(argv)
    setup_logger(level=logging.DEBUG if args.verbose else logging.WARNING)
    load_config()
    print("Verifying osmgest OSM API Setup\n")
    print("=" * 60)

    all_checks_passed = True

    print("\n1. Checking Environment Variables...")
    ok, msgs = check_env_vars()
    for msg in msgs:
        print(f"   {msg}")
    if not ok:
        print("\n[X] Configuration is invalid; skipping network checks.")
        return 1

    client = OsmApiClient()

    print("\n2. Checking API Versions...")
    ok, msg = check_versions(client)
    print(f"   {msg}")
    if not ok:
        all_checks_passed = False

    print("\n3. Checking Access Token (Optional)...")
    ok, msg = check_token(client)
    print(f"   {msg}")
    # A missing or rejected token does not fail the run; reads still work.

    print("\n" + "=" * 60)

    if all_checks_passed:
        print("\n[OK] All critical checks passed!")
        return 0
    print("\n[X] Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
