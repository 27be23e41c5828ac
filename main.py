import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from firebase_admin import credentials

import config
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from routes.profile import router as profile_router
from routes.users import router as users_router
from services.firestore import FirestoreDB
from services.memory_store import InMemoryDB

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.use_in_memory_store():
        logger.info("Using in-memory document store")
        app.state.firestore = InMemoryDB()
    else:
        # Initialize Firebase Admin SDK
        cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
        firebase_app = firebase_admin.initialize_app(cred)
        app.state.firestore = FirestoreDB(firebase_app)
        logger.info("Connected to Firestore (project=%s)", firebase_app.project_id)

    yield


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body validation failures as 400 with one entry per field"""
    errors = []
    for error in exc.errors():
        # Custom validators raise ValueError; report their message verbatim
        cause = error.get("ctx", {}).get("error")
        # Unparseable JSON is located by character offset, not field name
        field = error["loc"][-1] if error["loc"] else None
        errors.append({
            "msg": str(cause) if cause is not None else error["msg"],
            "param": field if isinstance(field, str) else "body",
        })
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Server error", status_code=500)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API running"


# Include routers
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
