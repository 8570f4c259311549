"""Shared test helpers: transport doubles and envelope payloads."""

import asyncio


class RecordingTransport:
    """Async transport double: records requested paths and answers from a queue of payloads/exceptions.

    The last response is repeated once the queue is down to one entry.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.paths: list[str] = []

    async def __call__(self, resource_path: str):
        self.paths.append(resource_path)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, BaseException):
            raise response
        return response


class GatedTransport:
    """Async transport double whose responses are released by the test, in any order."""

    def __init__(self):
        self.paths: list[str] = []
        self._pending: list[asyncio.Future] = []

    async def __call__(self, resource_path: str):
        self.paths.append(resource_path)
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def resolve(self, index: int, payload):
        self._pending[index].set_result(payload)

    def fail(self, index: int, error: BaseException):
        self._pending[index].set_exception(error)


def envelope(items, total=None):
    """Collection payload as the server sends it."""
    payload = {"@odata.context": "https://example.test/$metadata#Items", "value": items}
    if total is not None:
        payload["@odata.count"] = total
    return payload


async def settle():
    """Let every ready task run until it blocks again."""
    for _ in range(5):
        await asyncio.sleep(0)
