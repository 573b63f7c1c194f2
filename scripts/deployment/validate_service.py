#!/usr/bin/env python3
"""
Smoke check for a running link shortener deployment.

Creates a link as the given user, checks listing, redirect and the failure
paths, then deletes what it created.

Usage:
    python validate_service.py --url https://sho.rt --token <identity provider token>
"""

import argparse
import sys
import time
from datetime import datetime
from typing import Optional

import requests


class ServiceValidator:
    """Validates link shortener functionality against a live service."""

    def __init__(self, base_url: str, token: str, redirect_prefix: str = "/r"):
        self.base_url = base_url.rstrip("/")
        self.redirect_prefix = "/" + redirect_prefix.strip("/")
        self.session = requests.Session()
        self.session.headers["Authorization"] = f"Bearer {token}"
        self.test_results = []

    def print_header(self, text: str):
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def _post_link(self, body: dict) -> dict:
        response = self.session.post(f"{self.base_url}/api/links", json=body, timeout=5)
        response.raise_for_status()
        return response.json()

    def test_health_check(self) -> bool:
        try:
            response = self.session.get(f"{self.base_url}/api/health", timeout=5)
            data = response.json() if response.status_code == 200 else {}
            healthy = data.get("status") == "healthy"
            self.print_test("Health Check", healthy, f"DB: {data.get('database', response.status_code)}")
            return healthy
        except requests.RequestException as e:
            self.print_test("Health Check", False, f"Error: {e}")
            return False

    def test_create_link(self, target_url: str) -> Optional[str]:
        try:
            result = self._post_link({"url": target_url})
            short_code = (result.get("data") or {}).get("short_code")
            self.print_test("Create Link", bool(result.get("success") and short_code), str(result))
            return short_code
        except requests.RequestException as e:
            self.print_test("Create Link", False, f"Error: {e}")
            return None

    def test_redirect(self, short_code: str, target_url: str) -> bool:
        try:
            response = self.session.get(
                f"{self.base_url}{self.redirect_prefix}/{short_code}",
                allow_redirects=False,
                timeout=5,
            )
            location = response.headers.get("Location", "")
            passed = response.status_code == 307 and location == target_url
            self.print_test("Redirect", passed, f"{response.status_code} -> {location or 'no Location header'}")
            return passed
        except requests.RequestException as e:
            self.print_test("Redirect", False, f"Error: {e}")
            return False

    def test_listing(self, short_code: str) -> Optional[int]:
        try:
            response = self.session.get(f"{self.base_url}/api/links", timeout=5)
            links = (response.json().get("data") or {}).get("links", [])
            match = next((link for link in links if link["short_code"] == short_code), None)
            self.print_test("Listing", match is not None, f"{len(links)} links")
            return match["id"] if match else None
        except requests.RequestException as e:
            self.print_test("Listing", False, f"Error: {e}")
            return None

    def test_duplicate_short_code(self, short_code: str) -> bool:
        try:
            result = self._post_link({"url": "https://example.com/dup", "short_code": short_code})
            passed = result == {"success": False, "error": "Short code already exists"}
            self.print_test("Duplicate Short Code Rejected", passed, str(result))
            return passed
        except requests.RequestException as e:
            self.print_test("Duplicate Short Code Rejected", False, f"Error: {e}")
            return False

    def test_invalid_url(self) -> bool:
        try:
            result = self._post_link({"url": "not-a-url"})
            passed = not result.get("success") and bool(result.get("error"))
            self.print_test("Invalid URL Rejected", passed, str(result))
            return passed
        except requests.RequestException as e:
            self.print_test("Invalid URL Rejected", False, f"Error: {e}")
            return False

    def test_unknown_code(self) -> bool:
        try:
            response = self.session.get(
                f"{self.base_url}{self.redirect_prefix}/missing-{int(time.time())}",
                allow_redirects=False,
                timeout=5,
            )
            passed = response.status_code == 404 and "Location" not in response.headers
            self.print_test("Unknown Code 404", passed, f"Status: {response.status_code}")
            return passed
        except requests.RequestException as e:
            self.print_test("Unknown Code 404", False, f"Error: {e}")
            return False

    def test_delete(self, link_id: int) -> bool:
        try:
            response = self.session.delete(f"{self.base_url}/api/links/{link_id}", timeout=5)
            passed = response.json() == {"success": True}
            self.print_test("Delete Link", passed, str(response.json()))
            return passed
        except requests.RequestException as e:
            self.print_test("Delete Link", False, f"Error: {e}")
            return False

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("Link Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_health_check():
            print("\nHealth check failed. Service may not be running.")
            return False

        target_url = f"https://example.com/validate/{int(time.time())}"
        short_code = self.test_create_link(target_url)
        if short_code:
            self.test_redirect(short_code, target_url)
            self.test_duplicate_short_code(short_code)
            link_id = self.test_listing(short_code)
            if link_id is not None:
                self.test_delete(link_id)

        self.test_invalid_url()
        self.test_unknown_code()

        self.print_summary()
        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {total - passed}")

        for name, ok in self.test_results:
            if not ok:
                print(f"   - {name}")
        print()


def main():
    parser = argparse.ArgumentParser(description="Validate a running link shortener")
    parser.add_argument("--url", default="http://localhost:9200", help="Base URL of the service")
    parser.add_argument("--token", required=True, help="Identity provider token of a test user")
    parser.add_argument("--redirect-prefix", default="/r", help="Path prefix of the redirect endpoint")

    args = parser.parse_args()

    validator = ServiceValidator(args.url, args.token, args.redirect_prefix)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
