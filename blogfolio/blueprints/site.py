from __future__ import annotations

from flask import Blueprint, render_template

bp = Blueprint("site", __name__)

import blogfolio.blueprints.view.site.demo  # noqa: E402,F401
import blogfolio.blueprints.view.site.wallet  # noqa: E402,F401


@bp.get("/")
def home():
    return render_template("home.html", title="Home")
