"""여행 일정 슬롯 생성 및 장소 검색 서비스."""
