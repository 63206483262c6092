"""
Placement Attendance Tracker - FastAPI Backend
Main application entry point
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from placement_attendance.core.config import settings
from placement_attendance.core.db import database
from placement_attendance.services.repositories import use_firestore
from placement_attendance.api import routes_admin, routes_public, routes_student, ws

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "placement_attendance", "templates")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    if not use_firestore():
        database.create_all()
        logger.info("Database tables created")
    else:
        logger.info("Using Firestore backend")
    yield
    database.dispose()
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Placement Attendance Tracker",
    description="Event registration, QR attendance and reminders for placement activities",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup templates
templates = Jinja2Templates(directory=TEMPLATES_DIR)

@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Landing page linking registration, the student dashboard and the core team dashboard"""
    return templates.TemplateResponse(request, "index.html", {
        "title": "Placement Attendance"
    })

@app.get("/admin", response_class=HTMLResponse)
async def admin_dashboard(request: Request):
    """Admin dashboard for creating and managing events"""
    return templates.TemplateResponse(request, "admin_dashboard.html", {
        "title": "Core Team Dashboard"
    })

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_student.router, prefix="/students", tags=["students"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
