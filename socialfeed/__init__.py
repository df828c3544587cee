# socialfeed/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, jsonify
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - 설정 및 도메인 예외
from socialfeed.core.config import config_by_name
from socialfeed.core.errors import SocialFeedError

# - API 블루프린트
from socialfeed.api.posts.routes import posts_bp
from socialfeed.api.comments.routes import comments_bp
from socialfeed.api.users.routes import users_bp
from socialfeed.api.uploads.routes import uploads_bp

# - 서비스 모듈
from socialfeed.graph import SocialGraph
from socialfeed.storage import create_document_store
from socialfeed.services.storage_service import StorageService
from socialfeed.api.posts.services import PostService
from socialfeed.api.comments.services import CommentService
from socialfeed.api.users.services import UserService

def create_app(config_name: Optional[str] = None):
    """
    Flask 애플리케이션 팩토리 함수.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    JWTManager(app)

    uses_firestore = app.config['STORAGE_BACKEND'] == 'firestore'
    if (uses_firestore or app.config.get('FIREBASE_STORAGE_BUCKET')) and not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred, {
            'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
        })

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 공용 서비스 먼저 생성
    app.services['store'] = create_document_store(app.config)
    app.services['graph'] = SocialGraph(app.services['store'])

    app.services['storage'] = None
    if app.config.get('FIREBASE_STORAGE_BUCKET'):
        try:
            storage_instance = StorageService()
            storage_instance.init_app(app)
            app.services['storage'] = storage_instance
            logging.info("Storage service initialized successfully")
        except Exception as e:
            logging.error(f"Failed to initialize storage service: {e}")
            raise
    else:
        logging.warning("FIREBASE_STORAGE_BUCKET 미설정: 이미지 첨부 없이 동작합니다.")

    # 5-2. 도메인 서비스 생성
    graph = app.services['graph']
    app.services['posts'] = PostService(graph, storage_service=app.services['storage'])
    app.services['comments'] = CommentService(graph, storage_service=app.services['storage'])
    app.services['users'] = UserService(graph, storage_service=app.services['storage'])

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(comments_bp, url_prefix='/api')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(uploads_bp, url_prefix='/api/uploads')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(SocialFeedError)
    def handle_social_feed_error(err):
        if err.status_code >= 500:
            logging.error(f"{err.error_code}: {err.message}", exc_info=True)
        response = {"error_code": err.error_code, "message": err.message}
        return jsonify(response), err.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return err
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'), format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
