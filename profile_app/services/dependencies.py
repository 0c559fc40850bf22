from fastapi import Depends
from sqlalchemy.orm import Session

from profile_app.auth.jwt_handler import TokenSigner, get_token_signer
from profile_app.core import config
from profile_app.database import get_db
from profile_app.services.credentials import CredentialService


def get_credential_service(
    db: Session = Depends(get_db),
    token_signer: TokenSigner = Depends(get_token_signer),
) -> CredentialService:
    return CredentialService(db, token_signer, password_rounds=config.BCRYPT_ROUNDS)
