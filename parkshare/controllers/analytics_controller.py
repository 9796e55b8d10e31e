import logging
from typing import List, Sequence
from sqlmodel import Session, select
from fastapi import HTTPException
from parkshare.models.parking_models import ParkingSession, ParkingSpace, SessionStatus
from parkshare.schemas.parking_schemas import OwnerSpaceSummary

logger = logging.getLogger(__name__)


class AnalyticsController:
    @staticmethod
    def summarize_space(space: ParkingSpace, sessions: Sequence[ParkingSession]) -> OwnerSpaceSummary:
        completed_sessions = [s for s in sessions if s.status == SessionStatus.completed]
        total_revenue = sum(s.amount_charged or 0 for s in completed_sessions)
        average_price = total_revenue / len(completed_sessions) if completed_sessions else 0

        return OwnerSpaceSummary(
            spaceId=space.id,
            address=space.address,
            totalSessions=len(sessions),
            completedSessions=len(completed_sessions),
            totalRevenue=total_revenue,
            averageSessionPrice=average_price,
        )

    @staticmethod
    def summarize_owner(owner_email: str, db: Session) -> List[OwnerSpaceSummary]:
        try:
            spaces = db.exec(select(ParkingSpace).where(ParkingSpace.owner_email == owner_email)).all()

            summaries = []
            for space in spaces:
                sessions = db.exec(
                    select(ParkingSession).where(ParkingSession.parking_space_id == space.id)
                ).all()
                summaries.append(AnalyticsController.summarize_space(space, sessions))
            return summaries

        except Exception as e:
            logger.error(f"Owner analytics failed for {owner_email}: {e}")
            raise HTTPException(status_code=500, detail=f"An error occured in summarize_owner: {e}")
