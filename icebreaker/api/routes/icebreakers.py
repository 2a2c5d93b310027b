from fastapi import APIRouter, HTTPException, Response

from ...models import (
    IcebreakerRequest,
    IcebreakerResponse,
    PersonalizedQuestion,
    ProfileContext,
    RawProfile,
    SelectionRequest,
    TargetedSelectionRequest,
)
from ...services.icebreaker_service import IcebreakerService, default_completion_service

router = APIRouter()
icebreaker_service = IcebreakerService(completion=default_completion_service())


@router.post("/analyze", response_model=ProfileContext)
async def analyze(profile: RawProfile) -> ProfileContext:
    return icebreaker_service.analyze_profile(profile)


@router.post("/icebreakers", response_model=IcebreakerResponse)
async def icebreakers(payload: IcebreakerRequest) -> IcebreakerResponse:
    return await icebreaker_service.generate_icebreakers(
        payload.profile, payload.session_id, payload.count
    )


@router.post("/questions/diverse", response_model=list[PersonalizedQuestion])
async def diverse_questions(payload: SelectionRequest) -> list[PersonalizedQuestion]:
    return await icebreaker_service.select_diverse(
        payload.context, payload.session_id, payload.count
    )


@router.post("/questions/targeted", response_model=list[PersonalizedQuestion])
async def targeted_questions(payload: TargetedSelectionRequest) -> list[PersonalizedQuestion]:
    try:
        return await icebreaker_service.select_targeted(
            payload.criteria, payload.context, payload.session_id, payload.count
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.delete("/sessions/{session_id}", status_code=204)
async def clear_session(session_id: str) -> Response:
    icebreaker_service.clear_session(session_id)
    return Response(status_code=204)
