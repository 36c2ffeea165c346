"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- keuangan: 월간 거래 게시, 수정, 월간 보고서
- transaksi_log: 거래 로그, 정산, 동기화
- anggota: 회원 명부
- pengaturan: 운영 설정
- pengumuman: 공지사항
- pinjaman: 대출 신청
"""
