"""
Basic Requests
==============

Builds a request step by step and sends it with the default transport.
Each call to ``request()`` without a configured transport opens and closes
its own connection.
"""

import reru


def main() -> None:
    # ── GET with query parameters ────────────────────────────────────────
    request = reru.get("https://httpbin.org/get").param("q", "rust").param("q", "lang")
    with request.request() as response:
        print(f"GET  → {response.status}")
        print(f"  URL:          {response.url}")
        print(f"  HTTP version: {response.version}")
        print(f"  Body:         {response.read()[:60]!r}…")
    print()

    # ── POST JSON, parse the JSON reply ──────────────────────────────────
    data = (
        reru.post("https://httpbin.org/post")
        .param("show_env", "1")
        .body_json(["蟹", "Ferris"])
        .request()
        .parse_json()
    )
    print("POST → JSON echoed:", data["json"])
    print()

    # ── DELETE ───────────────────────────────────────────────────────────
    with reru.delete("https://httpbin.org/delete").request() as response:
        print(f"DELETE → {response.status}")


if __name__ == "__main__":
    main()
