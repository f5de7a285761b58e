"""
File: profile_api/api_router.py
Description: 根 API 路由聚合层

本模块负责：
1. 聚合业务领域的 Router
2. 统一设置路由前缀与 OpenAPI 标签

Created: 2026-10-19
"""

from fastapi import APIRouter

from profile_api.domains.profile.router import router as profile_router

api_router = APIRouter()

# 完整档案 (Profile Domain)：/users/me/full-profile
api_router.include_router(profile_router, prefix="/users", tags=["profile"])
