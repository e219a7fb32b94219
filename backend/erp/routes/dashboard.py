# Overview: Dashboard endpoints; any authenticated user may read them.

from flask import Blueprint, jsonify, request

from ..decorators import require_auth
from ..services import dashboard_service

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")

MAX_DASHBOARD_LIMIT = 50


def _limit() -> int:
    limit = request.args.get("limit", type=int) or dashboard_service.DEFAULT_DASHBOARD_LIMIT
    return min(max(limit, 1), MAX_DASHBOARD_LIMIT)


@dashboard_bp.get("/stats")
@require_auth
def stats():
    return dashboard_service.get_stats()


@dashboard_bp.get("/recent-orders")
@require_auth
def recent_orders():
    return jsonify(dashboard_service.get_recent_orders(_limit()))


@dashboard_bp.get("/top-products")
@require_auth
def top_products():
    return jsonify(dashboard_service.get_top_products(_limit()))


@dashboard_bp.get("/sales-by-category")
@require_auth
def sales_by_category():
    return jsonify(dashboard_service.get_sales_by_category())
