from botocore.exceptions import ClientError


def client_error(code="AuthFailure", operation="ModifySnapshotAttribute"):
    return ClientError(
        {"Error": {"Code": code, "Message": f"{code} for test"}},
        operation,
    )
