"""Byte-counting wrapper around the ASGI ``send`` callable."""

from starlette.types import Message, Send

DEFAULT_STATUS_CODE = 200


class ResponseByteCounter:
    """Pass-through ``send`` that tallies response body bytes.

    Every message is forwarded to the wrapped ``send`` immediately and
    unchanged. The status is taken from the start message before it is
    forwarded, so it survives a failed send. Body bytes are only counted
    once the inner ``send`` returns.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._byte_count = 0
        self._status_code = DEFAULT_STATUS_CODE
        self._response_started = False

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self._status_code = int(message["status"])
            self._response_started = True

        await self._send(message)

        if message_type == "http.response.body":
            self._byte_count += len(message.get("body", b""))

    @property
    def byte_count(self) -> int:
        return self._byte_count

    @property
    def status_code(self) -> int:
        """Last status sent, or 200 if the app never started a response."""
        return self._status_code

    @property
    def response_started(self) -> bool:
        return self._response_started
