"""Prompt builders for the pediatric clinical narrative."""
from __future__ import annotations

from typing import Dict, List, Optional

from ...schemas.triage import NarrativeRequest

MISSING = "未录入"
NO_FINDINGS = "无特异性症状"


def _value(value: Optional[float]) -> str:
    if value is None:
        return MISSING
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _age_part(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def build_system_prompt() -> str:
    """Return the system prompt for the narrative assistant."""

    return (
        "你是一名资深儿科急诊专家，为分诊护士和首接医生撰写预检分析。\n"
        "分诊级别由规则引擎确定，不得修改，只做补充分析。\n"
        "语言风格：专业、严谨、简洁。格式：使用Markdown。\n"
    )


def output_sections() -> str:
    return (
        "请按以下结构输出：\n"
        "1. 【病情评估】 分析当前生命体征和症状的严重性及其在儿科急诊中的临床意义。\n"
        "2. 【潜在风险】 基于当前指标，列出可能出现的恶化指标或潜在并发症。\n"
        "3. 【临床路径建议】 建议的实验室检查及影像学检查。\n"
        "4. 【干预重点】 护理及首接医生应重点监测的生命体征。"
    )


def build_user_prompt(data: NarrativeRequest) -> str:
    """Compose the patient block and output instructions."""

    vitals = data.vitals
    patient_lines = [
        "患儿基本资料：",
        f"- 年龄：{_age_part(data.age_years)}岁 {_age_part(data.age_months)}月 {_age_part(data.age_days)}天",
        f"- 体重：{_value(data.weight)}kg",
        f"- 体温：{_value(vitals.temperature)}°C",
        f"- 心率：{_value(vitals.heart_rate)}次/分",
        f"- 呼吸：{_value(vitals.resp_rate)}次/分",
        f"- 血压：{_value(vitals.systolic_bp)}mmHg",
        f"- SpO2：{_value(vitals.spo2)}%",
        f"- CRT：{_value(vitals.crt)}秒",
        f"- 预检分级结果：{data.level_name}",
        f"- 识别到的症状：{'、'.join(data.findings) or NO_FINDINGS}",
    ]
    sections = [
        "作为一名资深儿科急诊专家，请针对以下患儿情况提供一份深度的临床预检分析报告：",
        "\n".join(patient_lines),
        output_sections(),
    ]
    return "\n\n".join(sections)


def build_messages(data: NarrativeRequest) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": build_system_prompt()},
        {"role": "user", "content": build_user_prompt(data)},
    ]
