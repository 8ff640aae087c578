"""기본 타입 정의 — 서비스 전체에서 공유하는 Annotated 타입 + wire 모델 베이스."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# 티커: 영문 대문자/숫자/구분자 (예: "AAPL", "BRK.B", "ITUB4.SA")
Ticker = Annotated[str, Field(min_length=1, examples=["AAPL", "TSLA"])]

# 가격: 0 이상 실수
Price = Annotated[float, Field(ge=0)]

# 거래량: 0 이상 정수
Volume = Annotated[int, Field(ge=0)]

# 감성 점수: -1 ~ 1
SignedScore = Annotated[float, Field(ge=-1, le=1)]

# 비율/확률: 0 ~ 1
Fraction = Annotated[float, Field(ge=0, le=1)]


class WireModel(BaseModel):
    """백엔드/UI JSON 계약 베이스 — camelCase alias, 불변 값 객체.

    Python 속성은 snake_case, 직렬화는 camelCase. 입력은 두 형식 모두 허용.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        protected_namespaces=(),
    )

    def to_wire(self) -> dict:
        """camelCase JSON-호환 dict."""
        return self.model_dump(mode="json", by_alias=True)
