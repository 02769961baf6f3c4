from flask import request, jsonify, abort
from flask_login import login_user, logout_user, login_required, current_user
from ...deletion.permissions import AuthContext
from ...models.user import User
from . import bp
from functools import wraps

def role_required(*roles):
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if current_user.role not in roles:
                abort(403)
            return f(*args, **kwargs)
        return wrapper
    return deco

def current_auth():
    return AuthContext.from_user(current_user)

@bp.post("/login")
def login():
    data = request.get_json(silent=True) or request.form
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    u = User.query.filter_by(username=username).one_or_none()
    if u and u.check_password(password):
        login_user(u)
        return jsonify({"user": u.to_dict()})
    return jsonify({"error": "Incorrect username or password"}), 401

@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"message": "Logged out"})

@bp.get("/me")
@login_required
def me():
    return jsonify({"user": current_user.to_dict()})
