"""Service Dashboard API client and command-line front end.

This module wraps the REST API exposed by ``service_dashboard_api``
using the ``requests`` library and renders its responses as plain
text.  It is the presentation side of the dashboard:

* :meth:`ServiceDashboardClient.get_dashboard` – counters and the revenue chart.
* :meth:`ServiceDashboardClient.select_range` – switch daily/weekly/monthly.
* :meth:`ServiceDashboardClient.list_services` – the service catalog.
* :meth:`ServiceDashboardClient.save_service` – add or update a service.
* :meth:`ServiceDashboardClient.toggle_availability` – flip availability.
* :meth:`ServiceDashboardClient.delete_service` – admin-only delete.

Every catalog mutation is followed by a full re-fetch of the catalog;
the client never patches its local copy.  The current user's role is
kept in a small file (see :class:`RoleStore`) and sent as the
``X-User-Role`` header.

Every public method returns a tuple ``(result, error)`` instead of
raising on HTTP failures.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
RANGES = ("daily", "weekly", "monthly")
Error = Optional[Dict[str, Any]]


class RoleStore:
    """Role string persisted in a local file.

    The location defaults to ``~/.service_dashboard/role`` and can be
    overridden with the ``SERVICE_DASHBOARD_ROLE_FILE`` environment
    variable.  A missing file means no role.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        default = Path.home() / ".service_dashboard" / "role"
        self.path = Path(path or os.getenv("SERVICE_DASHBOARD_ROLE_FILE") or default)

    def get(self) -> str:
        """Return the stored role verbatim, minus a trailing line break."""
        try:
            return self.path.read_text(encoding="utf-8").rstrip("\r\n")
        except FileNotFoundError:
            return ""

    def set(self, role: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(role, encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class ServiceDashboardClient:
    """Client for the service catalog and dashboard endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        role_store: Optional[RoleStore] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including the version prefix,
                e.g. ``http://localhost:8000/api/v1``.
            role_store: Where the current role is kept.  Defaults to
                :class:`RoleStore` with its default path.
            session: Optional requests session.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.role_store = role_store or RoleStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        role = self.role_store.get()
        if role:
            headers["X-User-Role"] = role
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    if isinstance(err_json, dict):
                        message = _detail_message(err_json.get("detail")) or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    def get_dashboard(self, range: Optional[str] = None) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Refresh and return the dashboard, optionally for another range."""
        params = {"range": range} if range else None
        return self._request("GET", "/dashboard/", params=params)

    def select_range(self, range: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Switch the chart range without fetching records again."""
        return self._request("PUT", "/dashboard/range", json_body={"range": range})

    # ------------------------------------------------------------------
    # Service catalog
    # ------------------------------------------------------------------
    def list_services(self) -> Tuple[List[Dict[str, Any]], Error]:
        data, error = self._request("GET", "/services/")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def save_service(
        self,
        *,
        title: str,
        details: str,
        price: Any,
        available: bool = True,
        service_id: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Error]:
        """Create a service, or update it when ``service_id`` is given.

        Title, details and price must all be filled in; otherwise no
        request is made.  Returns the re-fetched catalog.
        """
        if not title or not details or price in (None, ""):
            return [], {"status_code": None, "message": "Please fill all fields"}
        body = {"title": title, "details": details, "price": price, "available": available}
        if service_id:
            _, error = self._request("PUT", f"/services/{service_id}", json_body=body)
        else:
            _, error = self._request("POST", "/services/", json_body=body)
        if error:
            return [], error
        return self.list_services()

    def toggle_availability(self, service_id: str) -> Tuple[List[Dict[str, Any]], Error]:
        _, error = self._request("PATCH", f"/services/{service_id}/availability")
        if error:
            return [], error
        return self.list_services()

    def delete_service(self, service_id: str) -> Tuple[List[Dict[str, Any]], Error]:
        """Delete a service.  Only attempted when the stored role is admin."""
        if self.role_store.get() != ADMIN_ROLE:
            return [], {"status_code": None, "message": "Only admin can delete services."}
        _, error = self._request("DELETE", f"/services/{service_id}")
        if error:
            return [], error
        return self.list_services()


def _detail_message(detail: Any) -> str:
    """Flatten FastAPI error details into one line."""
    if isinstance(detail, list):
        return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
    return str(detail) if detail else ""


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------
def format_peso(value: Any) -> str:
    """Format an amount with the peso sign and grouped thousands."""
    number = float(value or 0)
    text = f"{number:,.3f}".rstrip("0").rstrip(".")
    return f"₱{text}"


def render_dashboard(dashboard: Dict[str, Any]) -> str:
    summary = dashboard.get("summary", {})
    chart = dashboard.get("chart", {})
    selected = str(dashboard.get("range", chart.get("range", "daily")))
    title = selected.capitalize()
    lines = [
        "Dashboard",
        f"  Total Services:     {summary.get('total_services', 0)}",
        f"  Available Services: {summary.get('available_services', 0)}",
        f"  Total Revenue:      {format_peso(summary.get('total_revenue'))}",
        f"  Total Expenses:     {format_peso(summary.get('total_expenses'))}",
        f"  Net Income:         {format_peso(summary.get('net_income'))}",
        "",
        f"Total {title} Income: {format_peso(chart.get('filtered_income'))}",
        "",
        f"{title} Revenue",
    ]
    buckets = chart.get("buckets") or []
    if not buckets:
        lines.append("  (no data)")
    width = max((len(b["label"]) for b in buckets), default=0)
    for bucket in buckets:
        lines.append(f"  {bucket['label']:<{width}}  {format_peso(bucket['revenue'])}")
    return "\n".join(lines)


def render_services(services: List[Dict[str, Any]], role: str = "") -> str:
    if not services:
        return "No services."
    lines = []
    for service in services:
        status = "Available" if service.get("available") else "Not Available"
        lines.append(f"[{service['id']}] {service.get('title')} - {format_peso(service.get('price'))} ({status})")
        lines.append(f"    {service.get('details')}")
    if role == ADMIN_ROLE:
        lines.append("")
        lines.append("Admin: services can be deleted with 'services delete <id>'.")
    return "\n".join(lines)


# ----------------------------------------------------------------------
# Command line
# ----------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Service catalog and dashboard client.")
    ap.add_argument(
        "--url",
        default=os.getenv("SERVICE_DASHBOARD_URL", "http://localhost:8000/api/v1"),
        help="API base URL including /api/v1",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    dash = sub.add_parser("dashboard", help="Show counters and the revenue chart")
    dash.add_argument("--range", choices=RANGES)

    services = sub.add_parser("services", help="Manage the service catalog")
    services_sub = services.add_subparsers(dest="action", required=True)
    services_sub.add_parser("list")
    for name in ("add", "update"):
        p = services_sub.add_parser(name)
        if name == "update":
            p.add_argument("id")
        p.add_argument("--title", required=True)
        p.add_argument("--details", required=True)
        p.add_argument("--price", required=True)
        p.add_argument("--unavailable", action="store_true")
    services_sub.add_parser("toggle").add_argument("id")
    services_sub.add_parser("delete").add_argument("id")

    role = sub.add_parser("role", help="Show or change the stored role")
    role_sub = role.add_subparsers(dest="action", required=True)
    role_sub.add_parser("show")
    role_sub.add_parser("set").add_argument("value")
    role_sub.add_parser("clear")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING)
    store = RoleStore()

    if args.command == "role":
        if args.action == "set":
            store.set(args.value)
        elif args.action == "clear":
            store.clear()
        print(store.get() or "(no role)")
        return 0

    client = ServiceDashboardClient(base_url=args.url, role_store=store)
    if args.command == "dashboard":
        data, error = client.get_dashboard(args.range)
        if error:
            print(f"[!] {error['message']}", file=sys.stderr)
            return 1
        print(render_dashboard(data))
        return 0

    if args.action == "list":
        services, error = client.list_services()
    elif args.action in ("add", "update"):
        services, error = client.save_service(
            title=args.title,
            details=args.details,
            price=args.price,
            available=not args.unavailable,
            service_id=getattr(args, "id", None),
        )
    elif args.action == "toggle":
        services, error = client.toggle_availability(args.id)
    else:
        services, error = client.delete_service(args.id)
    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1
    print(render_services(services, store.get()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
