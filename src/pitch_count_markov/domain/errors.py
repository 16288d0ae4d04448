from dataclasses import dataclass


@dataclass(frozen=True)
class PcmError:
    message: str


@dataclass(frozen=True)
class GatewayError(PcmError):
    """A remote fetch that could not produce a usable payload.

    Covers transport failures, non-2xx responses, undecodable bodies and
    payloads whose top-level shape is wrong.
    """

    endpoint: str
    resource_id: int
    status_code: int | None = None
