#!/usr/bin/env python3
import os
import sys
import requests
from dotenv import load_dotenv

load_dotenv()

API_BASE = os.getenv("CAR_API_BASE", "http://localhost:7071")

GASPAR = {
    "id": "001",
    "imageUrl": "https://x",
    "year": "2020/2020",
    "name": "Gaspar",
    "licence": "ABC-1234",
    "place": {"lat": 0, "long": 0},
}


def expect(response, status):
    if response.status_code != status:
        print(f"❌ {response.request.method} {response.url}: expected {status}, got {response.status_code} - {response.text}")
        sys.exit(1)
    print(f"✅ {response.request.method} {response.url} -> {status}")
    return response.json() if response.content else None


def single_car_lifecycle():
    print("Step 1: Single car lifecycle...")
    body = expect(requests.post(f"{API_BASE}/car", json=GASPAR), 201)
    if body != GASPAR:
        print(f"❌ Created car differs from the one sent: {body}")
        sys.exit(1)
    body = expect(requests.post(f"{API_BASE}/car", json=GASPAR), 400)
    print(f"   Duplicate rejected: {body['error']}")
    body = expect(requests.get(f"{API_BASE}/car/001"), 200)
    print(f"   Fetched: {body['value']['name']}")
    body = expect(requests.delete(f"{API_BASE}/car/001"), 200)
    print(f"   {body['message']}")
    expect(requests.get(f"{API_BASE}/car/001"), 404)


def batch_with_invalid_element():
    print("\nStep 2: Batch create with one invalid element...")
    a = dict(GASPAR, id="smoke-a")
    b = {k: v for k, v in GASPAR.items() if k != "name"}
    b["id"] = "smoke-b"
    body = expect(requests.post(f"{API_BASE}/car", json=[a, b]), 400)
    print(f"   Errors: {body['errors']}")

    ids = [c["id"] for c in expect(requests.get(f"{API_BASE}/car"), 200)]
    if "smoke-a" not in ids or "smoke-b" in ids:
        print(f"❌ Unexpected store contents: {ids}")
        sys.exit(1)
    print("   smoke-a stored, smoke-b rejected")
    expect(requests.delete(f"{API_BASE}/car/smoke-a"), 200)


def main():
    print(f"=== Car API smoke test against {API_BASE} ===\n")
    single_car_lifecycle()
    batch_with_invalid_element()
    print("\n✅ All checks passed.")

if __name__ == "__main__":
    main()
