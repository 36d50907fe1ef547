from typing import Optional
from lbnamer.types.base import BaseModel


class NamerConfig(BaseModel):
    """Cluster naming configuration persisted in the cluster UID config map."""

    uid: str
    provider_uid: Optional[str]

    @property
    def firewall_name(self) -> str:
        """Firewall rules are named after the provider UID when one is set."""
        return self.provider_uid or ""

    def as_config_map_data(self):
        data = {"uid": self.uid}
        if self.provider_uid:
            data["provider-uid"] = self.provider_uid
        return data
