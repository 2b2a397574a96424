"""
quizdoc
문서에 포함된 자가 점검 퀴즈를 읽어 렌더러에 제공하는 서비스
"""
__version__ = "0.1.0"
