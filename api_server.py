"""
internet15 Storage Node API Server

FastAPI server backing the SDK's storage endpoint. Stores uploads on local
disk under their SHA-256 content hash and records file metadata in SQLite.

Endpoints:
- GET /health - Health check
- POST /upload - Upload a file, returns its content hash
- GET /download/{content_hash} - Download file by hash
- GET /ipfs/{content_hash} - Gateway-style retrieval path
- GET /files - List uploaded file metadata

License: MIT
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import quote

import uvicorn
from fastapi import FastAPI, HTTPException, UploadFile, File, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field
from loguru import logger

from internet15.backends.local import ContentStore
from internet15.backends.metadata_db import FileMetadataDB
from internet15.config.settings import NodeConfig, load_node_config


# =============================================================================
# API Models
# =============================================================================

class UploadResponse(BaseModel):
    """Response for file upload."""

    hash: str = Field(..., description="SHA-256 content hash")
    filename: str = Field(..., description="Original file name")
    size: int = Field(..., description="Size in bytes")
    message: str = Field(..., description="Human readable summary")


class FileRecord(BaseModel):
    """File listing item."""

    id: int
    filename: str
    file_type: str
    file_size: int
    uploaded_at: int
    content_hash: str


# =============================================================================
# Global State
# =============================================================================

class AppState:
    """Application state."""

    def __init__(self):
        self.config: Optional[NodeConfig] = None
        self.store: Optional[ContentStore] = None
        self.metadata_db: Optional[FileMetadataDB] = None
        self.upload_counter: int = 0

    async def initialize(self, config: NodeConfig):
        """Initialize application state."""
        self.config = config
        self.store = ContentStore(config.storage_path)
        self.metadata_db = FileMetadataDB(config.metadata_db)
        self.upload_counter = 0

        logger.info("✅ Storage node initialized")
        logger.info("   Storage path: {}", config.storage_path)
        logger.info("   Metadata DB: {}", config.metadata_db)

    async def shutdown(self):
        """Cleanup resources."""
        logger.info("✅ Storage node shutdown complete")


# Global app state
app_state = AppState()


# =============================================================================
# Lifespan Management
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    await app_state.initialize(load_node_config())

    yield

    await app_state.shutdown()


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="internet15 Storage Node",
    description="Content-addressed storage node for the internet15 SDK",
    version="0.1.0",
    lifespan=lifespan,
)

# Browser SDK clients call the node directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "internet15-storage-node",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "stored_files": len(app_state.store.list_hashes()),
        "uploads_since_start": app_state.upload_counter,
    }


# =============================================================================
# File Upload & Download
# =============================================================================

@app.post("/upload", response_model=UploadResponse)
async def upload_file(file: UploadFile = File(...)):
    """Store an uploaded file and record its metadata."""
    content = await file.read()

    if len(content) > app_state.config.max_file_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large (max {app_state.config.max_file_size} bytes)"
        )

    filename = file.filename or "upload.dat"
    content_hash = app_state.store.store(content)
    app_state.metadata_db.record_file(
        filename=filename,
        file_type=file.content_type or "application/octet-stream",
        file_size=len(content),
        content_hash=content_hash,
    )
    app_state.upload_counter += 1

    logger.info("✅ Uploaded file: {} ({})", filename, content_hash)

    return UploadResponse(
        hash=content_hash,
        filename=filename,
        size=len(content),
        message=f"Stored with hash: {content_hash}",
    )


def content_disposition(filename: str) -> str:
    """
    Build an attachment header safe for any filename.

    Non-latin-1 names go in the RFC 5987 ``filename*`` parameter; the plain
    ``filename`` keeps an ASCII fallback without quotes or control characters.
    """
    fallback = "".join(
        ch if 32 <= ord(ch) < 127 and ch not in '"\\' else "_"
        for ch in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def _file_response(content_hash: str) -> StreamingResponse:
    content = app_state.store.retrieve(content_hash)
    if content is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found"
        )

    metadata = app_state.metadata_db.get_by_hash(content_hash)
    media_type = metadata.file_type if metadata else "application/octet-stream"
    headers = {"Content-Length": str(len(content))}
    if metadata:
        headers["Content-Disposition"] = content_disposition(metadata.filename)

    logger.info("📥 Downloaded {} ({} bytes)", content_hash, len(content))

    return StreamingResponse(iter([content]), media_type=media_type, headers=headers)


@app.get("/download/{content_hash}")
async def download_file(content_hash: str):
    """Download file by content hash."""
    return _file_response(content_hash)


@app.get("/ipfs/{content_hash}")
async def gateway_file(content_hash: str):
    """Gateway-style retrieval, the URL shape the SDK's resolve_file builds."""
    return _file_response(content_hash)


@app.get("/files", response_model=List[FileRecord])
async def list_files():
    """List uploaded file metadata."""
    return [FileRecord(**meta.to_dict()) for meta in app_state.metadata_db.list_files()]


# =============================================================================
# Main Entry Point
# =============================================================================

def main():
    """Run storage node API server."""
    logger.add(
        "logs/internet15_node_{time}.log",
        rotation="1 day",
        retention="30 days",
        level="INFO"
    )

    config = load_node_config()

    logger.info("🚀 Starting storage node on {}:{}", config.host, config.port)
    logger.info("   Storage path: {}", config.storage_path)

    uvicorn.run(
        "internet15.api_server:app",
        host=config.host,
        port=config.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
