"""
Default storage classification tables.

H_TO_CATEGORY_RULES is scanned in declaration order and the first matching
rule wins, so more severe classes come first.
"""
from typing import Dict, List

from core.schema import HazardRule, StorageCategory


H_TO_CATEGORY_RULES: List[HazardRule] = [
    # Explosives
    HazardRule(
        h_codes={"H200", "H201", "H202", "H203", "H204", "H205"},
        category=StorageCategory.CAT_1,
    ),
    # Flammable, compressed and liquefied gases, aerosols
    HazardRule(
        h_codes={"H220", "H221", "H222", "H223", "H229", "H230", "H231", "H280", "H281"},
        category=StorageCategory.CAT_2,
    ),
    # Flammable liquids
    HazardRule(
        h_codes={"H224", "H225", "H226"},
        flammable=True,
        category=StorageCategory.CAT_3,
    ),
    # Flammable solids, self-reactive, pyrophoric and water-reactive substances
    HazardRule(
        h_codes={"H228", "H250", "H251", "H252", "H260", "H261"},
        category=StorageCategory.CAT_4,
    ),
    # Oxidizers and organic peroxides
    HazardRule(
        h_codes={"H240", "H241", "H242", "H270", "H271", "H272"},
        category=StorageCategory.CAT_5,
    ),
    # Acutely toxic substances
    HazardRule(
        h_codes={"H300", "H301", "H310", "H311", "H330", "H331"},
        category=StorageCategory.CAT_6,
    ),
    # Corrosives
    HazardRule(
        h_codes={"H290", "H314"},
        category=StorageCategory.CAT_8,
    ),
    # Environmentally hazardous
    HazardRule(
        h_codes={"H400", "H410", "H411"},
        category=StorageCategory.CAT_9,
    ),
]


CATEGORY_LABELS: Dict[StorageCategory, str] = {
    StorageCategory.UNKNOWN: "未知（需人工确认）",
    StorageCategory.CAT_1: "第1类 爆炸品",
    StorageCategory.CAT_2: "第2类 气体",
    StorageCategory.CAT_3: "第3类 易燃液体",
    StorageCategory.CAT_4: "第4类 易燃固体、易于自燃的物质、遇水放出易燃气体的物质",
    StorageCategory.CAT_5: "第5类 氧化性物质和有机过氧化物",
    StorageCategory.CAT_6: "第6类 毒性物质",
    StorageCategory.CAT_7: "第7类 放射性物质",
    StorageCategory.CAT_8: "第8类 腐蚀性物质",
    StorageCategory.CAT_9: "第9类 杂项危险物质",
}
