"""Error types and the user-facing (Simplified Chinese) messages."""

from __future__ import annotations


class BoundaryCallError(RuntimeError):
    """Any failure of a remote model call.

    Encoding, network, empty body, invalid JSON and schema mismatches all
    collapse into this one error; callers do not distinguish subkinds.
    """


ANALYSIS_FAILED_MESSAGE = "分析失败。可能是视频编码问题或服务繁忙，请重试。"
REVIEW_FAILED_MESSAGE = "批改失败。可能是视频编码问题或服务繁忙，请重试。"
EMPTY_SCRIPT_MESSAGE = "请先输入脚本内容再提交。"


def oversized_message(max_bytes: int) -> str:
    limit_mb = max_bytes / (1024 * 1024)
    label = f"{limit_mb:g}MB"
    return f"文件过大。由于 API 负载限制，请上传 {label} 以内的短视频片段。"
