"""
Hue bridge REST client
Turns the bridge's full state into accessories and refreshes it on heartbeat
"""

import asyncio
import logging
import aiohttp
from typing import Any, Dict, List, Optional

from .client import BridgeClient, BridgeError
from .models import Accessory
from config_loader import PlatformConfig
from http_helper import create_bridge_session

logger = logging.getLogger(__name__)

PHILIPS_MANUFACTURERS = ('Philips', 'Signify Netherlands B.V.')

class HueBridgeClient(BridgeClient):
    """Client for the Hue bridge v1 REST API"""

    def __init__(self, config: PlatformConfig, address: str):
        self.config = config
        self.address = address
        self.base_url = f"http://{address}/api"
        self.bridge_id: Optional[str] = None
        self.name = address
        self.username: Optional[str] = None
        self.state: Dict[str, Any] = {}
        self.refresh_count = 0

    async def accessories(self) -> List[Accessory]:
        bridge_config = await self._get_json("/config")
        self.bridge_id = str(bridge_config.get('bridgeid', '')).upper()
        self.name = bridge_config.get('name', self.address)

        self.username = self.config.users.get(self.bridge_id)
        if not self.username:
            raise BridgeError(
                f"{self.name}: no username configured for bridge {self.bridge_id} "
                f"- add it to \"users\""
            )

        self.state = await self._get_json(f"/{self.username}")
        accessories = self._build_accessories()
        logger.info(f"{self.name}: {len(accessories)} accessories at {self.address}")
        return accessories

    async def heartbeat(self, beat: int) -> None:
        if self.username is None or beat % max(1, int(self.config.heartrate)) != 0:
            return

        try:
            self.state = await self._get_json(f"/{self.username}")
            self.refresh_count += 1
            logger.debug(f"{self.name}: state refreshed (beat {beat})")
        except BridgeError as e:
            logger.warning(f"{self.name}: heartbeat refresh failed: {e}")

    def resource_state(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Latest known state of a bridge resource, e.g. "/lights/3"
        Reflects the most recent heartbeat refresh
        """
        section, _, resource_id = path.strip('/').partition('/')
        resource = self.state.get(section, {}).get(resource_id)
        return resource if isinstance(resource, dict) else None

    # ================== ACCESSORY MAPPING ==================

    def _build_accessories(self) -> List[Accessory]:
        accessories = []
        accessories.extend(self._light_accessories())
        if self.config.groups:
            accessories.extend(self._group_accessories())
        if self.config.sensors:
            accessories.extend(self._sensor_accessories())
        if self.config.schedules:
            accessories.extend(self._simple_accessories('schedules', 'schedule'))
        if self.config.rules:
            accessories.extend(self._simple_accessories('rules', 'rule'))
        return accessories

    def _light_accessories(self) -> List[Accessory]:
        if not (self.config.lights or self.config.philips_lights):
            return []

        result = []
        for light_id, light in self.state.get('lights', {}).items():
            manufacturer = light.get('manufacturername', '')
            if not self.config.lights and manufacturer not in PHILIPS_MANUFACTURERS:
                continue

            light_state = light.get('state', {})
            features = []
            if self.config.ct and 'ct' in light_state:
                features.append('color_temperature')
            if self.config.fake_color and 'ct' in light_state and 'xy' not in light_state:
                features.append('fake_color')

            result.append(self._accessory(light, 'light', f"/lights/{light_id}", features))
        return result

    def _group_accessories(self) -> List[Accessory]:
        result = []
        if self.config.group0:
            # Group 0 is implicit and never listed in the full state
            result.append(Accessory(
                name=f"{self.name} All Lights",
                kind='group',
                resource="/groups/0",
                bridge=self.address,
            ))
        for group_id, group in self.state.get('groups', {}).items():
            if group.get('type') == 'Room' and not self.config.rooms:
                continue
            result.append(self._accessory(group, 'group', f"/groups/{group_id}"))
        return result

    def _sensor_accessories(self) -> List[Accessory]:
        result = []
        for sensor_id, sensor in self.state.get('sensors', {}).items():
            sensor_type = sensor.get('type', '')
            if any(sensor_type.startswith(excluded) for excluded in self.config.exclude_sensor_types):
                logger.debug(f"{self.name}: ignoring {sensor_type} sensor {sensor.get('name')}")
                continue
            result.append(self._accessory(sensor, 'sensor', f"/sensors/{sensor_id}"))
        return result

    def _simple_accessories(self, section: str, kind: str) -> List[Accessory]:
        return [
            self._accessory(item, kind, f"/{section}/{item_id}")
            for item_id, item in self.state.get(section, {}).items()
        ]

    def _accessory(self, resource: Dict, kind: str, path: str, features=()) -> Accessory:
        return Accessory(
            name=resource.get('name', f"{kind} {path}"),
            kind=kind,
            resource=path,
            bridge=self.address,
            features=tuple(features),
        )

    # ================== HTTP ==================

    async def _get_json(self, path: str) -> Any:
        """GET a bridge resource; any failure is raised as BridgeError"""
        url = f"{self.base_url}{path}"
        try:
            async with create_bridge_session(self.config.timeout_seconds) as session:
                async with session.get(url) as response:
                    if response.status != 200:
                        raise BridgeError(f"{self.name}: status {response.status} for {path}")
                    body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise BridgeError(f"{self.name}: communication error {e!r}") from e

        # The bridge reports API errors as a list of {"error": {...}} objects
        if isinstance(body, list):
            errors = [item['error'].get('description', '') for item in body
                      if isinstance(item, dict) and isinstance(item.get('error'), dict)]
            raise BridgeError(f"{self.name}: {'; '.join(errors) or 'unexpected response'}")
        if not isinstance(body, dict):
            raise BridgeError(f"{self.name}: unexpected response for {path}")
        return body
