from flask import Flask, request, jsonify
from flask_cors import CORS
import logging
import sys

import cronogramas
import tools
from activity_log import ActivityLog, LogSettings
from config import Config
from errors import CronogramasError, MissingParameterError
from models import db
from rpc import Dispatcher

logger = logging.getLogger(__name__)


def create_app(config_class=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)

    CORS(app, origins="*", methods="*", allow_headers="*")
    db.init_app(app)

    activity_log = ActivityLog(LogSettings(
        console_enabled=app.config['CONSOLE_LOGS'],
        logs_dir=app.config['LOGS_DIR'],
    ))
    dispatcher = Dispatcher(activity_log)
    app.extensions['activity_log'] = activity_log

    # Health check
    @app.route('/health', methods=['GET'])
    def health():
        activity_log.info("Health check performed")
        return jsonify({"status": "ok", "message": "MCP Server is running"})

    # Console log control
    @app.route('/logs/toggle', methods=['POST'])
    def toggle_logs():
        data = request.get_json(silent=True) or {}
        enabled = data.get('enabled')

        if not isinstance(enabled, bool):
            return jsonify({"error": "The 'enabled' parameter must be a boolean"}), 400

        activity_log.set_console_enabled(enabled)
        return jsonify({
            "status": "ok",
            "message": f"Console logs {'enabled' if enabled else 'disabled'}",
            "consoleLogsEnabled": enabled
        })

    @app.route('/logs/status', methods=['GET'])
    def logs_status():
        return jsonify({
            "consoleLogsEnabled": activity_log.console_enabled,
            "logsDirectory": activity_log.logs_directory
        })

    # Tool catalog with the project context
    @app.route('/tools', methods=['GET'])
    def list_tools():
        try:
            projects = cronogramas.get_projects()
            return jsonify({
                "tools": tools.TOOLS,
                "projectsContext": tools.projects_context(projects)
            })
        except CronogramasError as e:
            return jsonify({"error": str(e)}), 500

    # MCP endpoint (JSON-RPC over HTTP)
    @app.route('/call', methods=['POST'])
    def call():
        body = request.get_json(silent=True)
        response, status = dispatcher.dispatch(body)
        return jsonify(response), status

    # Direct routes for each read tool
    @app.route('/api/cronogramas', methods=['GET'])
    def get_cronogramas():
        try:
            return jsonify(cronogramas.get_cronogramas())
        except CronogramasError as e:
            return jsonify({"error": str(e)}), 500

    @app.route('/api/projects', methods=['GET'])
    def get_projects():
        try:
            return jsonify(cronogramas.get_projects())
        except CronogramasError as e:
            return jsonify({"error": str(e)}), 500

    @app.route('/api/cronogramas/<int:id_cronograma>/tareas', methods=['GET'])
    def get_tareas_cronograma(id_cronograma):
        try:
            return jsonify(cronogramas.get_tareas_cronograma(id_cronograma))
        except MissingParameterError as e:
            return jsonify({"error": str(e)}), 400
        except CronogramasError as e:
            return jsonify({"error": str(e)}), 500

    return app


def log_startup(app):
    activity_log = app.extensions['activity_log']
    port = app.config['PORT']
    base = f"http://localhost:{port}"

    activity_log.info("=" * 80)
    activity_log.info("Starting Cronogramas MCP Server")
    activity_log.info(f"Port: {port}")
    activity_log.info(f"DB Host: {app.config['DB_HOST']}")
    activity_log.info(f"DB Name: {app.config['DB_NAME']}")
    activity_log.info("=" * 80)
    activity_log.info(f"MCP Server HTTP listening on {base}")
    activity_log.info("Available endpoints:")
    activity_log.info(f"  GET  {base}/health")
    activity_log.info(f"  GET  {base}/api/cronogramas")
    activity_log.info(f"  GET  {base}/api/projects")
    activity_log.info(f"  GET  {base}/api/cronogramas/:id_cronograma/tareas")
    activity_log.info(f"  POST {base}/call (MCP Protocol - Streamable HTTP)")
    activity_log.info(f"  POST {base}/logs/toggle (console log control)")
    activity_log.info(f"  GET  {base}/logs/status (console log status)")
    activity_log.info("To disable console logs, start with CONSOLE_LOGS=false")


def main():
    logging.basicConfig(level=logging.INFO)
    try:
        app = create_app()
        log_startup(app)
        app.run(host='0.0.0.0', port=app.config['PORT'])
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
