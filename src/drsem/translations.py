from typing import Dict, List

LANGUAGES = ("th", "en", "cn")
DEFAULT_LANGUAGE = "th"

_FOOTER = (
    "© 2026 Dr. Pattaroj Kamonrojsiri. All rights reserved. "
    "Unauthorized reproduction or distribution is prohibited."
)

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "th": {
        "greeting": "สวัสดีครับ ผม Dr.SEM ยินดีให้คำปรึกษาเรื่อง Structural Equation Modeling ครับ",
        "placeholder": "ถามคำถามเกี่ยวกับ SEM, Model Fit หรือขอคำแนะนำ...",
        "upload": "อัปโหลดเอกสาร/รูปภาพ",
        "toolCanvas": "กระดานวิจัย",
        "toolFit": "ตรวจสอบ Fit Index",
        "toolApa": "ตาราง APA",
        "toolJamovi": "Jamovi Syntax",
        "footer": _FOOTER,
        "suggestion": "แนะนำให้ใช้เครื่องมือ:",
        "switch": "เปลี่ยน",
        "importantQuestions": "ข้อคำถามที่สำคัญ",
        "relatedQuestions": "ข้อคำถามที่เกี่ยวเนื่อง",
    },
    "en": {
        "greeting": "Hello, I am Dr.SEM, ready to assist you with Structural Equation Modeling.",
        "placeholder": "Ask about SEM, Model Fit, or seek advice...",
        "upload": "Upload Doc/Image",
        "toolCanvas": "Research Canvas",
        "toolFit": "Fit Checker",
        "toolApa": "APA Table",
        "toolJamovi": "Jamovi Syntax",
        "footer": _FOOTER,
        "suggestion": "Suggested Tool:",
        "switch": "Switch",
        "importantQuestions": "Important Questions",
        "relatedQuestions": "Related Questions",
    },
    "cn": {
        "greeting": "你好，我是 Dr.SEM，很高兴为您提供结构方程模型咨询。",
        "placeholder": "询问关于 SEM、模型拟合或寻求建议...",
        "upload": "上传文档/图片",
        "toolCanvas": "研究画布",
        "toolFit": "拟合指数检查",
        "toolApa": "APA 表格",
        "toolJamovi": "Jamovi 语法",
        "footer": _FOOTER,
        "suggestion": "建议使用工具:",
        "switch": "切换",
        "importantQuestions": "重要问题",
        "relatedQuestions": "相关问题",
    },
}

SIDEBAR_ITEMS: List[Dict[str, object]] = [
    {
        "title": "Dr.SEM User Guide",
        "items": [
            "How to use Dr.SEM Chatbot",
            "How to use Research Canvas",
            "Drawing & Auto-Layout Models",
            "Checking Fit Indices",
            "Generating APA Tables",
            "Exporting to PDF/Markdown",
        ],
    },
    {
        "title": "1. SEM Fundamentals",
        "items": [
            "What is SEM?",
            "SEM vs Regression",
            "Latent vs Observed Variables",
            "Exogenous vs Endogenous",
            "The 6 Steps of SEM",
            "Software for SEM (Jamovi/AMOS/Mplus)",
        ],
    },
    {
        "title": "2. Data Preparation",
        "items": [
            "Sample Size Requirements (10:1)",
            "Missing Data Handling",
            "Multivariate Normality",
            "Outlier Detection",
            "Multicollinearity Checks",
        ],
    },
    {
        "title": "3. Measurement Model (CFA)",
        "items": [
            "Concept of CFA",
            "Factor Loading Criteria",
            "Convergent Validity (AVE, CR)",
            "Discriminant Validity (Fornell-Larcker)",
            "Model Fit Indices (CFI, RMSEA)",
            "Modification Indices",
        ],
    },
    {
        "title": "4. Structural Model",
        "items": [
            "Path Analysis Basics",
            "Direct Effects",
            "Indirect Effects (Mediation)",
            "Total Effects",
            "Moderation Analysis",
            "Coefficient of Determination (R²)",
        ],
    },
    {
        "title": "5. Jamovi for SEM",
        "items": [
            "Installing SEMLj Module",
            "Importing Data to Jamovi",
            "Running CFA in Jamovi",
            "Running Path Analysis in Jamovi",
            "Interpreting Jamovi Output",
            "Reporting Jamovi Results",
        ],
    },
    {
        "title": "6. Research Examples",
        "items": [
            "CFA Research Example",
            "Path Analysis Example",
            "Full SEM Model Example",
            "Mediation Analysis Example",
            "Multi-Group Analysis Example",
        ],
    },
]


def normalize_language(language: str) -> str:
    if language in LANGUAGES:
        return language
    return DEFAULT_LANGUAGE


def get_strings(language: str) -> Dict[str, str]:
    return TRANSLATIONS[normalize_language(language)]
