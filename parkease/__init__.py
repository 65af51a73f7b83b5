import os
import logging
from flask import Flask, jsonify
from parkease.config import Config
from parkease.extensions import db, recognizer
from parkease.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'), app.config.get('LOG_FILE'))
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    db.init_app(app)
    recognizer.init_app(app)

    from parkease.controllers.parking_controller import parking_bp
    from parkease.controllers.scan_controller import scan_bp
    from parkease.cli import watch_arrivals

    app.register_blueprint(parking_bp)
    app.register_blueprint(scan_bp)
    app.cli.add_command(watch_arrivals)

    with app.app_context():

        from parkease.models import parking_db
        db.create_all()

    @app.route('/healthy')
    def healthy():
        return {'status': 'healthy', 'message': 'Server is running!'}

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'success': False, 'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'success': False, 'message': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({'success': False, 'message': 'Uploaded file is too large'}), 413

    logger.info("Application created")
    return app
