#!/usr/bin/env python
"""
快捷启动脚本 - 直接运行 FastAPI 应用
使用方法: python run.py
"""
import os
import platform
import socket
import subprocess
import sys


def is_port_in_use(port: int) -> bool:
    """检查端口是否被占用"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind(("", port))
            return False
        except OSError:
            return True


def get_process_info_on_port(port: int) -> str:
    """获取占用端口的进程信息"""
    if platform.system() not in ("Darwin", "Linux"):
        return "Unknown process"
    try:
        result = subprocess.run(["lsof", f"-i:{port}"], capture_output=True, text=True)
    except OSError:
        return "Unknown process"
    for line in result.stdout.splitlines():
        if "LISTEN" in line:
            parts = line.split()
            if len(parts) > 1:
                return f"Process: {parts[0]} (PID: {parts[1]})"
    return "Unknown process"


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    host = os.getenv("HOST", "0.0.0.0")
    reload = os.getenv("RELOAD", "true").lower() == "true"

    if is_port_in_use(port):
        print(f"⚠️ Port {port} is already in use by {get_process_info_on_port(port)}")
        print(f"Use a different port: PORT={port + 1} python {__file__}")
        sys.exit(1)

    print("=" * 60)
    print("🚀 Text Insight API")
    print("=" * 60)
    print(f"📍 Server: http://{host}:{port}")
    print(f"📚 API Docs: http://localhost:{port}/docs")
    print("=" * 60)
    print("Press CTRL+C to stop the server")
    print()

    try:
        uvicorn.run(
            "textinsight.main:app",  # 使用字符串导入以支持 reload
            host=host,
            port=port,
            reload=reload,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped")
        sys.exit(0)
