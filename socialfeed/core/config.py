# socialfeed/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # JWT 토큰 서명에 사용하는 키. 토큰은 외부 인증 제공자가 발급하고, 이 서비스는 검증만 합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')

    # 문서 저장소 백엔드 선택: 'firestore' 또는 'memory'
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'firestore')

    # 로그 레벨 (INFO, DEBUG, WARNING ...)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # 인증 제공자가 표시 이름을 주지 않을 때 사용하는 기본값
    UNKNOWN_DISPLAY_NAME = "Unknown User"

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다. Firestore 대신 인메모리 저장소를 사용합니다."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    STORAGE_BACKEND = os.getenv('TEST_STORAGE_BACKEND', 'memory')
    FIREBASE_STORAGE_BUCKET = os.getenv('TEST_FIREBASE_STORAGE_BUCKET')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'socialfeed-testing-secret-key-0123456789')

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
