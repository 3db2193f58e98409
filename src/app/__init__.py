"""
App layer: fetch client adapters + 개발용 서버 (FastAPI).

역할:
- clients/: JSON, RPC stub, binary 전송 전략과 공통 오케스트레이션
- config.py: default.yaml 로드, 클라이언트 설정
- main.py: 로컬 개발/통합 테스트용 로그인·에코 서버
"""
