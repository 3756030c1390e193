from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """Identity supplied by the host. The engine trusts it and never authenticates."""

    tenant_id: str
    user_id: str
