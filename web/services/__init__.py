"""
Web 서비스 패키지

라우트에서 사용하는 비즈니스 로직 조합
"""
