from flask import jsonify
from flask_login import login_required

from . import admin_bp
from storefront.services import catalog, orders


@admin_bp.get("/stats")
@login_required
def stats():
    data = orders.get_stats()
    data["products"] = catalog.count_active_products()
    return jsonify(data), 200
