"""
PinZi FastAPI 服务

提供 RESTful 拼音转换接口
"""

import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from pinzi.engine import (
    DictionaryError,
    EngineConfig,
    POLICIES,
    PinyinConverter,
    create_converter,
    get_api_logger,
)

# 初始化日志
logger = get_api_logger()


# ===== 请求/响应模型 =====

class ConvertRequest(BaseModel):
    """转换请求"""
    text: str = Field(..., description="待转换文本")
    policy: str = Field("pinyin", description="输出格式: pinyin / initials")


class SegmentItem(BaseModel):
    """切分片段"""
    text: str
    pinyin: Optional[str] = None


class ConvertResponse(BaseModel):
    """转换响应"""
    text: str
    policy: str
    result: str
    segments: List[SegmentItem]


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str
    version: str


# ===== 全局转换器实例 =====
converter: Optional[PinyinConverter] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    global converter

    logger.info("=" * 50)
    logger.info("PinZi API 服务启动")

    config = EngineConfig.from_env()
    try:
        converter = create_converter(config)
        logger.info(f"词典加载完成: {converter.dictionary!r}")
    except DictionaryError as e:
        converter = None
        logger.error(f"词典加载失败，服务将以未就绪状态运行: {e}")
    logger.info("=" * 50)

    yield

    logger.info("正在关闭转换器...")
    converter = None
    logger.info("PinZi API 服务已停止")


# ===== FastAPI 应用 =====
app = FastAPI(
    title="PinZi API",
    description="汉字转拼音 API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===== 请求日志中间件 =====

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """记录所有请求的详细日志"""
    request_id = str(uuid.uuid4())[:8]
    start_time = time.perf_counter()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"[{request_id}] --> {request.method} {request.url.path} | IP: {client_ip}")

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"[{request_id}] <-- ERROR | {elapsed_ms:.2f}ms | {type(e).__name__}: {e}")
        raise

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    status_code = response.status_code
    log_level = "info" if status_code < 400 else "warning" if status_code < 500 else "error"
    getattr(logger, log_level)(f"[{request_id}] <-- {status_code} | {elapsed_ms:.2f}ms")

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
    return response


def _require_converter() -> PinyinConverter:
    if converter is None:
        logger.error("词典未就绪，拒绝请求")
        raise HTTPException(status_code=503, detail="词典未就绪")
    return converter


# ===== API 路由 =====

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """健康检查"""
    from pinzi import __version__
    return HealthResponse(
        status="healthy" if converter else "not_ready",
        version=__version__,
    )


@app.post("/convert", response_model=ConvertResponse)
async def convert_text(request: ConvertRequest):
    """按指定格式转换文本"""
    conv = _require_converter()

    if request.policy not in POLICIES:
        logger.warning(f"无效请求: 未知格式 '{request.policy}'")
        raise HTTPException(
            status_code=400,
            detail=f"未知格式: {request.policy}，可选: {sorted(POLICIES)}",
        )

    result = conv.convert(request.text, request.policy)
    segments = [
        SegmentItem(text=seg.text, pinyin=seg.entry.pinyin if seg.entry else None)
        for seg in conv.segment(request.text)
    ]
    logger.debug(f"转换: '{request.text[:20]}' [{request.policy}] -> '{result[:40]}'")

    return ConvertResponse(
        text=request.text,
        policy=request.policy,
        result=result,
        segments=segments,
    )


@app.get("/pinyin")
async def pinyin(text: str):
    """完整拼音"""
    return {"text": text, "pinyin": _require_converter().pinyin(text)}


@app.get("/initials")
async def initials(text: str):
    """拼音首字母"""
    return {"text": text, "initials": _require_converter().initials(text)}


@app.get("/stats")
async def get_stats():
    """词典统计信息"""
    stats = _require_converter().get_stats()
    logger.info(f"统计查询: {stats}")
    return stats


# ===== 启动入口 =====

def main():
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()

    logger.info(f"启动 PinZi API 服务: http://{host}:{port}")
    logger.info(f"API 文档: http://{host}:{port}/docs")

    uvicorn.run(
        "pinzi.api.server:app",
        host=host,
        port=port,
        reload=False,
        workers=1,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
