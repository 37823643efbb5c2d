"""Materials, used to fill cabinet and door material choices."""

from __future__ import annotations

from cabinet_pricing.contracts.records import Material
from cabinet_pricing.infrastructure.api.http import ResourceClient


class MaterialsClient(ResourceClient[Material]):
    """Client for ``/api/pricing/materials/``."""

    path = "/api/pricing/materials/"
    record_type = Material
    label = "material"
    plural = "materials"

    async def active(self) -> list[Material]:
        page = await self.list({"is_active": True})
        return page.items

    async def cabinet_materials(self) -> list[Material]:
        """Active materials usable for cabinet carcasses (CABINET or BOTH)."""
        return [m for m in await self.active() if m.usable_for_cabinet]

    async def door_materials(self) -> list[Material]:
        """Active materials usable for doors (DOOR or BOTH)."""
        return [m for m in await self.active() if m.usable_for_door]
