from __future__ import annotations


class LookupFailure(Exception):
    """查询失败的领域异常基类，携带对外的 HTTP 状态码与错误文案。"""

    status_code = 500
    default_message = "Failed to fetch street cleaning data."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingParameter(LookupFailure):
    status_code = 400
    default_message = "Address parameter is required"


class AddressNotFound(LookupFailure):
    status_code = 404
    default_message = "Address not found."


class NoScheduleData(LookupFailure):
    status_code = 404
    default_message = "No street cleaning data found."

    NOT_COVERED = "Street cleaning data does not cover this exact address number."


class UpstreamFailure(LookupFailure):
    status_code = 500


class RequestCancelled(LookupFailure):
    status_code = 499
    default_message = "Request cancelled."
