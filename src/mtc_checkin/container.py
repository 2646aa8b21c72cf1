from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.http_gateway import AiohttpAttendanceGateway
from .attendance.service import AttendanceService
from .checkin.flow import CheckInFlow
from .core import constants
from .geocoding.opencage_geocoder import OpenCageFallbackGeocoder
from .location.provider import GeolocationProvider
from .location.source import PositionSource
from .session.model import SessionContext
from .session.roles import RoleProfile, profile_for


@dataclass(frozen=True)
class Container:
    session: SessionContext
    profile: RoleProfile

    geocoder: OpenCageFallbackGeocoder
    gateway: AiohttpAttendanceGateway

    attendance_service: AttendanceService
    position_source: PositionSource
    checkin_flow: CheckInFlow


def build_container(*, settings, session: SessionContext, provider: Optional[GeolocationProvider]) -> Container:
    profile = profile_for(session.role, settings)

    geocoder = OpenCageFallbackGeocoder(
        getattr(settings, "OPENCAGE_API_KEY", None),
        timeout_s=float(getattr(settings, "GEOCODER_TIMEOUT_S", constants.DEFAULT_GEOCODER_TIMEOUT_S)),
    )
    gateway = AiohttpAttendanceGateway(
        str(settings.API_BASE_URL),
        timeout_s=float(getattr(settings, "API_TIMEOUT_S", constants.DEFAULT_API_TIMEOUT_S)),
    )

    attendance_service = AttendanceService(
        gateway,
        endpoint=profile.endpoint,
        rest_weekday=int(getattr(settings, "REST_WEEKDAY", constants.DEFAULT_REST_WEEKDAY)),
    )
    position_source = PositionSource(
        provider,
        geocoder,
        fallback_query=session.fallback_query,
        escalate_after_s=float(getattr(settings, "ESCALATE_AFTER_S", constants.DEFAULT_ESCALATE_AFTER_S)),
        error_debounce_s=float(getattr(settings, "ERROR_DEBOUNCE_S", constants.DEFAULT_ERROR_DEBOUNCE_S)),
    )
    checkin_flow = CheckInFlow(
        session,
        position_source,
        attendance_service,
        threshold_m=profile.threshold_m,
        apply_interval_ms=int(getattr(settings, "APPLY_INTERVAL_MS", constants.DEFAULT_APPLY_INTERVAL_MS)),
    )

    return Container(
        session=session,
        profile=profile,
        geocoder=geocoder,
        gateway=gateway,
        attendance_service=attendance_service,
        position_source=position_source,
        checkin_flow=checkin_flow,
    )
