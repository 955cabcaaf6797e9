from fastapi.security import OAuth2PasswordBearer

# Tokens are issued by the identity service; this engine only reads them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
