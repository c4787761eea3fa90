# frontend/services/api_client.py
from typing import List, Optional, Dict, Any
import os, requests

API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def _err(resp) -> str:
    try:
        j = resp.json()
        if isinstance(j, dict) and "detail" in j:
            return str(j["detail"])
        return str(j)
    except Exception:
        return resp.text or f"HTTP {resp.status_code}"


class MarketplaceClient:
    """Thin wrapper over the /api gateway.

    `session` defaults to a requests.Session; anything exposing the same
    get/post/patch/put/delete signature (e.g. a test client) works too.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, user_id: Optional[int] = None,
                 timeout: int = 15):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.user_id = user_id
        self.timeout = timeout

    def _url(self, p: str) -> str:
        return f"{self.base_url}/api{p}"

    def _params(self, params: Optional[Dict[str, Any]] = None, auth: bool = True) -> Dict[str, Any]:
        out = {k: v for k, v in (params or {}).items() if v is not None}
        if auth and self.user_id is not None:
            out["user_id"] = self.user_id
        return out

    def _request(self, method: str, path: str, params=None, json=None, auth: bool = True):
        kwargs: Dict[str, Any] = {"params": self._params(params, auth), "timeout": self.timeout}
        if json is not None:
            kwargs["json"] = json
        r = getattr(self.session, method)(self._url(path), **kwargs)
        if r.status_code >= 400:
            raise ApiError(_err(r), r.status_code)
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    # ---- Accounts ----
    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("post", "/users/login", json={"email": email, "password": password}, auth=False)
        self.user_id = data["user"]["id"]
        return data["user"]

    def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("post", "/users/register", json=payload, auth=False)

    # ---- Products / orders ----
    def get_products(self, **filters) -> List[Dict[str, Any]]:
        return self._request("get", "/products", params=filters, auth=False)

    def create_order(self, items: List[Dict[str, int]], shipping_address: Optional[Dict[str, Any]] = None,
                     **extra) -> Dict[str, Any]:
        body = {"items": items, "shipping_address": shipping_address, **extra}
        return self._request("post", "/orders", json=body)

    def get_my_orders(self) -> List[Dict[str, Any]]:
        return self._request("get", "/orders")

    def update_order_status(self, order_id: int, status: str) -> Dict[str, Any]:
        return self._request("patch", f"/orders/{order_id}/status", json={"status": status})

    # ---- Bookings ----
    def create_booking(self, kind: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("post", f"/bookings/{kind}", json=payload)

    def get_bookings(self, kind: Optional[str] = None, view: Optional[str] = None) -> List[Dict[str, Any]]:
        path = f"/bookings/{kind}" if kind else "/bookings"
        return self._request("get", path, params={"view": view})

    def update_booking_status(self, kind: str, booking_id: int, status: Optional[str] = None,
                              current_location: Optional[str] = None) -> Dict[str, Any]:
        body = {k: v for k, v in {"status": status, "current_location": current_location}.items() if v is not None}
        return self._request("patch", f"/bookings/{kind}/{booking_id}", json=body)

    # ---- Tracking / pricing ----
    def track(self, code: str) -> Dict[str, Any]:
        return self._request("get", "/track", params={"id": code}, auth=False)

    def quote(self, speed: str, package_type: Optional[str] = None, weight: Optional[float] = None) -> Dict[str, Any]:
        params = {"speed": speed, "package_type": package_type, "weight": weight}
        return self._request("get", "/pricing/logistics", params=params, auth=False)

    # ---- Dashboards ----
    def dashboard_stats(self) -> Dict[str, Any]:
        return self._request("get", "/dashboard/stats")

    def provider_dashboard(self) -> Dict[str, Any]:
        return self._request("get", "/dashboard/provider")

    def notification_counts(self) -> Dict[str, Any]:
        return self._request("get", "/notifications/counts")
