"""
Detection API Router - canonical record and network facts over HTTP
"""
from typing import Optional

from fastapi import APIRouter, Request

from infodetect.detector import InfoDetector
from infodetect.probes.environment import ClientReportEnvironment
from infodetect.schemas.record_schemas import ClientReport
from shared.state import get_network_resolver

router = APIRouter(tags=["Detect"])


def _detector_for(request: Request, report: Optional[ClientReport]) -> InfoDetector:
    env = ClientReportEnvironment(report=report, headers=dict(request.headers))
    return InfoDetector(env, resolver=get_network_resolver())


@router.post("/detect")
async def detect(request: Request, report: Optional[ClientReport] = None, force_refresh: bool = False):
    """
    Reconcile the posted client report and the request's Client Hints into
    the canonical record.
    Returns:
    - the record fields, with a snapshot of the cached network facts
    - screen and connection, read straight from the report
    """
    detector = _detector_for(request, report)
    record = await detector.build_record(force_network_refresh=force_refresh)

    data = record.to_dict()
    data["screen"] = detector.get_screen().model_dump(mode="json")
    connection = detector.get_connection()
    data["connection"] = connection.model_dump(mode="json") if connection else None
    return data


@router.get("/network")
async def network(force_refresh: bool = False):
    """
    Public network facts of this process (IP, ISP, country).
    Served from cache while fresh; force_refresh walks the provider chain.
    """
    facts = await get_network_resolver().resolve(force_refresh)
    return facts.model_dump(mode="json")
