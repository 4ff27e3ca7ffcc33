"""
JSON and Form Bodies
====================

A request carries at most one body. The last of ``body_json()`` and
``body_form()`` wins, and the Content-Type header follows it.
"""

import reru


def main() -> None:
    # ── JSON body ────────────────────────────────────────────────────────
    data = (
        reru.post("https://httpbin.org/post")
        .body_json({"name": "reru", "version": reru.__version__})
        .request()
        .parse_json()
    )
    print("JSON POST:")
    print(f"  Content-Type sent: {data['headers']['Content-Type']}")
    print(f"  Echoed JSON: {data['json']}")
    print()

    # ── URL-encoded form data ────────────────────────────────────────────
    data = (
        reru.post("https://httpbin.org/post")
        .body_form("username", "admin")
        .body_form("password", "s3cret")
        .request()
        .parse_json()
    )
    print("Form POST:")
    print(f"  Content-Type sent: {data['headers']['Content-Type']}")
    print(f"  Echoed form: {data['form']}")
    print()

    # ── Switching body kinds ─────────────────────────────────────────────
    request = reru.post("https://httpbin.org/post").body_json([1, 2, 3])
    request = request.body_form("replaced", "yes")
    prepared = request.prepare()
    print("JSON, then form:")
    print(f"  Content-Type: {prepared.headers['content-type']}")
    print(f"  Body: {prepared.content!r}")


if __name__ == "__main__":
    main()
