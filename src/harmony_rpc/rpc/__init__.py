"""
Wire layer - JSON-RPC envelopes and the HTTP transport.

Uses httpx for HTTP; responses are passed through without decoding.
"""
