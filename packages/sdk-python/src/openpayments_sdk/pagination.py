def pagination_params(
    *,
    wallet_address: str | None = None,
    first: int | None = None,
    last: int | None = None,
    cursor: str | None = None,
) -> dict[str, str] | None:
    """Query parameters for list endpoints; only the values actually given are sent."""
    params: dict[str, str] = {}
    if wallet_address:
        params["wallet-address"] = wallet_address
    if first:
        params["first"] = str(first)
    if last:
        params["last"] = str(last)
    if cursor:
        params["cursor"] = cursor
    return params or None
