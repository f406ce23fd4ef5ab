#!/usr/bin/env python3
"""Integration check: exercise every public method on CopyleaksClient in sandbox mode."""

from __future__ import annotations

import os
import sys
import tempfile

from copyleaks_sdk import CopyleaksAPIError, CopyleaksClient, CopyleaksConfig

passed: list[str] = []
failed: list[tuple[str, str]] = []
skipped: list[tuple[str, str]] = []


def ok(name: str, result: object = None) -> None:
    tag = type(result).__name__ if result is not None else "None"
    print(f"  PASS  {name}  -> {tag}")
    passed.append(name)


def fail(name: str, err: Exception) -> None:
    msg = str(err)[:200]
    print(f"  FAIL  {name}  -> {msg}")
    failed.append((name, msg))


def skip(name: str, reason: str) -> None:
    print(f"  SKIP  {name}  ({reason})")
    skipped.append((name, reason))


def crash(name: str, exc: Exception) -> None:
    msg = f"{type(exc).__name__}: {exc}"[:200]
    print(f"  CRASH {name}  -> {msg}")
    failed.append((name, msg))


def run(name: str, fn, *, allowed: set[int] | None = None):
    """Run fn(), record pass/fail/expected-error."""
    try:
        result = fn()
        ok(name, result)
        return result
    except CopyleaksAPIError as e:
        if allowed and e.status_code in allowed:
            ok(name, e)
        else:
            fail(name, e)
        return None
    except Exception as e:
        crash(name, e)
        return None


def main() -> None:
    email = os.environ.get("COPYLEAKS_EMAIL")
    api_key = os.environ.get("COPYLEAKS_API_KEY")
    if not email or not api_key:
        print("COPYLEAKS_EMAIL and COPYLEAKS_API_KEY must be set")
        sys.exit(2)

    config = CopyleaksConfig.from_env(sandbox_mode=True)
    client = CopyleaksClient(email, api_key, product=os.environ.get("COPYLEAKS_PRODUCT", "businesses"), config=config)

    print("\n=== Account ===")
    run("login", client.login)
    run("count_credits", client.count_credits)

    print("\n=== Create ===")
    created: list[str] = []
    process = run("create_by_url", lambda: client.create_by_url("https://copyleaks.com"), allowed={400})
    if process is not None:
        created.append(process.process_id)

    process = run("create_by_text", lambda: client.create_by_text("Hello from the SDK sandbox check."), allowed={400, 404})
    if process is not None:
        created.append(process.process_id)

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "sandbox.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("Sandbox upload from the Copyleaks Python SDK.")
        process = run("create_by_file", lambda: client.create_by_file(path), allowed={400})
        if process is not None:
            created.append(process.process_id)

    print("\n=== Processes ===")
    run("list_processes", client.list_processes)
    if created:
        pid = created[0]
        run("get_status", lambda: client.get_status(pid), allowed={404})
        run("get_result", lambda: client.get_result(pid), allowed={404, 409})
    else:
        skip("get_status", "no process created")
        skip("get_result", "no process created")

    print("\n=== Cleanup ===")
    if created:
        for pid in created:
            run(f"delete_process[{pid}]", lambda pid=pid: client.delete_process(pid), allowed={404, 409})
    else:
        skip("delete_process", "no process created")

    client.close()

    print("\n" + "=" * 60)
    print(f"PASSED: {len(passed)}   FAILED: {len(failed)}   SKIPPED: {len(skipped)}")
    if failed:
        print("\nFailed methods:")
        for name, err in failed:
            print(f"  - {name}: {err}")
    if skipped:
        print("\nSkipped methods:")
        for name, reason in skipped:
            print(f"  - {name}: {reason}")
    print("=" * 60)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
