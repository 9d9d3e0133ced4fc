"""Flask web application for the oil change screen."""

import os

from flask import Flask, render_template, request, redirect, url_for, flash

from oil_tracker import (
    ImageHandle,
    MemoryNotifier,
    OilChangeScreen,
    RecordStore,
    Status,
    StaticPermissionGate,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# None means the default prefs file ($OILCHANGE_HOME or ~/.oilchange)
app.config.setdefault("PREFS_PATH", None)


class UploadCaptureSurface:
    """Capture surface backed by a photo uploaded with the form."""

    def __init__(self, upload):
        self.upload = upload

    def capture_image(self):
        if self.upload is None or not self.upload.filename:
            return None
        return ImageHandle(
            source=self.upload.filename,
            data=self.upload.read(),
            content_type=self.upload.mimetype or "application/octet-stream",
        )


def status_color(status: Status) -> str:
    """Get Tailwind color classes for the reminder status."""
    colors = {
        Status.OVERDUE: "bg-red-100 text-red-800 border-red-200",
        Status.DUE_SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.OK: "bg-green-100 text-green-800 border-green-200",
        Status.UNKNOWN: "bg-gray-100 text-gray-500 border-gray-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


app.jinja_env.filters["status_color"] = status_color


def get_screen(notifier, capture_surface=None) -> OilChangeScreen:
    """Screen wired to this request's notifier and the configured store."""
    return OilChangeScreen(
        RecordStore(app.config["PREFS_PATH"]),
        notifier=notifier,
        # The browser asks the user for camera access before uploading
        permission_gate=StaticPermissionGate(True),
        capture_surface=capture_surface,
    )


def render_screen(
    mileage: str = "", interval: str = "", photo=None, status_code: int = 200
):
    """Render the page, re-checking the reminder against `mileage`."""
    notifier = MemoryNotifier()
    state = get_screen(notifier).render(mileage)
    return (
        render_template(
            "index.html",
            state=state,
            notifications=notifier.notifications,
            mileage=mileage,
            interval=interval,
            photo=photo,
            Status=Status,
        ),
        status_code,
    )


@app.route("/")
def index():
    """The oil change screen."""
    return render_screen(mileage=request.args.get("current", ""))


@app.route("/oil-change", methods=["POST"])
def save_oil_change():
    """Handle the record oil change form."""
    mileage = request.form.get("mileage", "")
    feedback = get_screen(MemoryNotifier()).save_oil_change(mileage)
    flash(feedback.message, feedback.level)
    if not feedback.ok:
        return render_screen(mileage=mileage, status_code=400)
    return redirect(url_for("index"))


@app.route("/interval", methods=["POST"])
def update_interval():
    """Handle the update interval form."""
    interval = request.form.get("interval", "")
    mileage = request.form.get("mileage", "")
    feedback = get_screen(MemoryNotifier()).update_interval(interval, mileage)
    flash(feedback.message, feedback.level)
    if not feedback.ok:
        return render_screen(mileage=mileage, interval=interval, status_code=400)
    if mileage:
        return redirect(url_for("index", current=mileage))
    return redirect(url_for("index"))


@app.route("/odometer-photo", methods=["POST"])
def odometer_photo():
    """Handle an uploaded odometer photo."""
    surface = UploadCaptureSurface(request.files.get("photo"))
    feedback = get_screen(MemoryNotifier(), capture_surface=surface).capture_odometer()
    if feedback.message:
        flash(feedback.message, feedback.level)
    if feedback.image is not None:
        # Shown once alongside the form; the photo is not kept
        return render_screen(photo=feedback.image)
    return redirect(url_for("index"))


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
