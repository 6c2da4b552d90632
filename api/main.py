"""
api.main
========

HTTP layer over the franchise-operations decision core.

Run locally with::

    python -m api.main
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from franchise_ops import __version__
from franchise_ops.settings import API_DEBUG, API_HOST, API_PORT, configure_logging

configure_logging()

app = FastAPI(
    title="Franchise Operations API",
    version=__version__,
    description="Channel distribution normalisation and lifecycle status resolution.",
    debug=API_DEBUG,
)

# --- CORS ----------------------------------------------------------
# Dev-only origins for the dashboard front end.
origins = [
    "http://localhost:5173",    # Vite dev server default port
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# --- Include Routers ----------------------------------------------------------
from .allocation import router as allocation_router  # noqa: E402
from .franchises import router as franchises_router  # noqa: E402
from .royalties import router as royalties_router  # noqa: E402
from .status import router as status_router  # noqa: E402

app.include_router(allocation_router)
app.include_router(status_router)
app.include_router(royalties_router)
app.include_router(franchises_router)


# ---------- health-check ----------
@app.get("/")
def root():
    return {"status": "ok", "msg": "Franchise operations API is alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, reload=API_DEBUG)
