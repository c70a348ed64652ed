#!/usr/bin/env python3
"""
FastAPI application for multi-agent website generation
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Import routers
from src.multi_agent import router as multi_agent_router

# Initialize FastAPI app
app = FastAPI(title="Website Generation API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(multi_agent_router)

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Website Generation API", "version": "1.0.0"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
