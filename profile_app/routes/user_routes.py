from fastapi import APIRouter, Depends
from pydantic import BaseModel

from profile_app.auth.dependencies import get_current_identity
from profile_app.auth.guard import TokenPayload
from profile_app.services.credentials import CredentialService
from profile_app.services.dependencies import get_credential_service

router = APIRouter(tags=['users'])


class UserResponse(BaseModel):
    id: str
    username: str
    campus: str | None = None
    course: str | None = None
    image: str | None = None

    class Config:
        from_attributes = True


class UpdateProfileRequest(BaseModel):
    image: str | None = None


@router.get('', response_model=UserResponse)
def get_current_user_profile(
    identity: TokenPayload = Depends(get_current_identity),
    service: CredentialService = Depends(get_credential_service),
):
    return service.get_profile(identity.id)


@router.put('', response_model=UserResponse)
def update_current_user_profile(
    data: UpdateProfileRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: CredentialService = Depends(get_credential_service),
):
    return service.update_profile_image(identity.id, data.image)
