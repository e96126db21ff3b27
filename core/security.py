# core/security.py
from passlib.hash import pbkdf2_sha256
from starlette.concurrency import run_in_threadpool

# stored hashed, never echoed back
SECRET_FIELDS = ("password", "security_answer")


async def hash_secret(secret: str) -> str:
    # key stretching is CPU bound; keep it off the event loop
    return await run_in_threadpool(pbkdf2_sha256.hash, secret)


async def hash_secrets(data: dict) -> dict:
    hashed = dict(data)
    for field in SECRET_FIELDS:
        if hashed.get(field) is not None:
            hashed[field] = await hash_secret(hashed[field])
    return hashed
