"""
Custom Transports & Testing Patterns
====================================

Any object with a ``send(method, url, headers, content)`` method can carry
a request. Wrapping an ``httpx.MockTransport`` gives canned responses
without touching the network.
"""

import httpx

import reru


def handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "content_type": request.headers.get("content-type"),
            "body": request.content.decode(),
        },
    )


def main() -> None:
    transport = reru.HTTPTransport(httpx.Client(transport=httpx.MockTransport(handler)))

    # ── Configure once on the builder ────────────────────────────────────
    request = reru.post("https://example.com/api").client(transport)
    echoed = request.body_form("x", "1").body_form("y", "2").request().parse_json()
    print(f"  Form echo: {echoed}")

    # ── Or pass it when sending ──────────────────────────────────────────
    request = reru.get("https://example.com/search").param("q", "rust")
    with request.request_with_client(transport) as response:
        print(f"  Status: {response.status}, URL: {response.url}")
        print(f"  Body: {response.read()!r}")

    transport.client.close()


if __name__ == "__main__":
    main()
