"""Export 파이프라인의 예외 계층.

- ExportError: 한 번의 export 시도를 실패시키는 오류의 공통 부모
- GenerationError: LLM 이 쓸 수 있는 결과를 돌려주지 않은 경우
- EmptyInputWarning: Record 가 0개인 경우 (오류가 아니라 경고)
"""


class ExportError(Exception):
    """export 한 건이 실패했음을 알린다. 재시도하지 않는다."""


class MeasurementError(ExportError):
    """주어진 폰트/크기에 대한 글자 폭 정보를 얻을 수 없다."""


class LayoutError(ExportError):
    """페이지 기하가 나눌 수 없는 단위를 담지 못하거나 커서를 잘못 사용했다."""


class EmissionError(ExportError):
    """PDF 렌더링 도중 하부 surface 가 실패했다."""


class ExportCancelled(ExportError):
    """호출자가 진행 중인 export 를 취소했다."""


class GenerationError(Exception):
    pass


class EmptyInputWarning(UserWarning):
    pass
