from fastapi import HTTPException
from typing import Any

def ok(result: Any = None, **extra):
    return {"result": result, **extra}

def err(message: str, code: str = "bad_request", status: int = 400):
    # raise rather than return, so handlers short-circuit
    raise HTTPException(status_code=status, detail={"error": message, "code": code})
