from fastapi import APIRouter, Depends, HTTPException
from textinsight.services.health_service import HealthService
from textinsight.api.deps import get_health_service
from textinsight.core.logging import get_logger
from typing import Dict, Any

router = APIRouter()
logger = get_logger(__name__)


@router.get("/")
async def health_check(
    health_service: HealthService = Depends(get_health_service)
) -> Dict[str, Any]:
    """
    健康检查

    返回应用的基本健康状态
    """
    try:
        return await health_service.check_health()
    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Service unavailable")


@router.get("/ready")
async def readiness_check(
    health_service: HealthService = Depends(get_health_service)
) -> Dict[str, Any]:
    """
    就绪检查

    检查 LanguageTool 是否可达、嵌入服务是否已配置
    """
    readiness_status = await health_service.check_readiness()
    if not readiness_status.get("ready", False):
        raise HTTPException(
            status_code=503,
            detail=f"Service not ready: {readiness_status.get('reason', 'Unknown')}"
        )
    return readiness_status


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    存活检查

    简单的存活探针，用于Kubernetes等容器编排工具
    """
    return {"status": "alive"}
