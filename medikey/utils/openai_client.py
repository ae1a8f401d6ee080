"""
OpenAI wrapper used by the records, AI chat and medical summary endpoints.

The client only exists when AI is enabled (see ``Settings.ai_enabled``).
Without it every helper answers from the caller's own data with a
deterministic fallback, so the application stays usable offline. API
failures are logged and turned into a user-facing message. The chat and
analysis helpers return that message; the summary helpers raise
``AIServiceError`` carrying it, so callers never store it as a summary.
"""

import html
import json
import logging
import re
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from medikey.core.config import settings

logger = logging.getLogger(__name__)

client: Optional[AsyncOpenAI] = AsyncOpenAI(api_key=settings.OPENAI_API_KEY) if settings.ai_enabled else None

QUOTA_MESSAGE = "The AI service is currently unavailable due to API usage limits. Please try again later."
APOLOGY_MESSAGE = "I apologize, but I'm having trouble processing your request right now. Please try again later."
DISCLAIMER = (
    "Please note that I'm not a replacement for professional medical advice; "
    "always consult your healthcare provider for medical decisions."
)


class AIServiceError(Exception):
    """An OpenAI call failed; `message` is safe to show to the user"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def is_quota_error(error: Exception) -> bool:
    if getattr(error, "code", None) == "insufficient_quota":
        return True
    return isinstance(error, openai.APIStatusError) and error.status_code == 429


async def _complete(operation: str, prompt: str, **params: Any) -> Optional[str]:
    response = await client.chat.completions.create(
        model=settings.OPENAI_MODEL,
        messages=[{"role": "user", "content": prompt}],
        **params,
    )
    logger.info(f"OpenAI {operation} completed with model {settings.OPENAI_MODEL}")
    return response.choices[0].message.content


def _paragraphs(lines: List[str]) -> str:
    return "".join(f"<p>{html.escape(line)}</p>" for line in lines)


# --- Summaries ---

def fallback_text_summary(text: str, max_lines: int = 3) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return "<p>No readable text was found in this document.</p>"
    excerpt = lines[:max_lines]
    return _paragraphs(["AI summaries are currently disabled. Document excerpt:"] + excerpt)


async def summarize_text(text: str) -> str:
    """Summarize a medical document as HTML paragraphs"""
    if client is None:
        return fallback_text_summary(text)

    prompt = f"""
Please provide a concise summary of the following medical document.
Focus on key medical findings, diagnoses, recommendations, and important dates.
Format the response in HTML with appropriate paragraph tags (<p>) for readability.

Document:
{text}
"""
    try:
        content = await _complete("summarize_text", prompt, temperature=0.3, max_tokens=500)
        return content or "Unable to generate summary."
    except openai.OpenAIError as e:
        logger.error(f"Error summarizing text: {e}")
        if is_quota_error(e):
            raise AIServiceError(f"<p>{QUOTA_MESSAGE}</p>") from e
        raise AIServiceError("<p>An error occurred while generating the summary.</p>") from e


def fallback_health_summary(context: Dict[str, Any]) -> str:
    user = context.get("user") or {}
    records = context.get("recentRecords") or []
    metrics = context.get("latestMetrics") or []

    name = user.get("fullName") or "This patient"
    intro = name
    if user.get("age") is not None:
        intro += f" ({user['age']})"
    facts = []
    if user.get("bloodType"):
        facts.append(f"blood type {user['bloodType']}")
    if user.get("chronicConditions"):
        facts.append(f"chronic conditions: {user['chronicConditions']}")
    if user.get("allergies"):
        facts.append(f"allergies: {user['allergies']}")
    lines = [f"{intro} has " + "; ".join(facts) + "." if facts else f"{intro} has no conditions or allergies on file."]

    if records:
        described = ", ".join(
            f"{r.get('title')} ({r.get('recordType')}, {str(r.get('recordDate', ''))[:10]})" for r in records
        )
        lines.append(f"{len(records)} recent medical record(s): {described}.")
    if metrics:
        readings = ", ".join(
            f"{m.get('metricType')} {m.get('value')}{(' ' + m['unit']) if m.get('unit') else ''}" for m in metrics
        )
        lines.append(f"Latest readings: {readings}.")
    lines.append("AI summaries are currently disabled; this overview lists stored data only.")
    return _paragraphs(lines)


async def generate_health_summary(context: Dict[str, Any]) -> str:
    """
    Generate an HTML overview of a user's health.

    `context` carries ``user`` (profile dict), ``recentRecords`` and
    optionally ``latestMetrics``.
    """
    if client is None:
        return fallback_health_summary(context)

    prompt = f"""
Please provide a comprehensive health summary for this patient based on their profile and medical records.
Format the response in HTML with appropriate paragraph tags (<p>) for readability.
Include relevant information about their conditions, trends in their health, and important recommendations.

Patient Profile:
{json.dumps(context.get("user"), indent=2, default=str)}

Recent Medical Records:
{json.dumps(context.get("recentRecords"), indent=2, default=str)}

Latest Health Metrics:
{json.dumps(context.get("latestMetrics", []), indent=2, default=str)}
"""
    try:
        content = await _complete("generate_health_summary", prompt, temperature=0.3, max_tokens=800)
        return content or "Unable to generate health summary."
    except openai.OpenAIError as e:
        logger.error(f"Error generating health summary: {e}")
        if is_quota_error(e):
            raise AIServiceError(f"<p>{QUOTA_MESSAGE}</p>") from e
        raise AIServiceError(fallback_health_summary(context)) from e


# --- Assistant ---

def _latest_metric(metrics: List[Dict[str, Any]], *metric_types: str) -> Optional[Dict[str, Any]]:
    """Metrics are newest first"""
    for metric in metrics:
        if metric.get("metricType") in metric_types:
            return metric
    return None


def _describe_metric(metric: Dict[str, Any]) -> str:
    value = metric.get("value")
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        parsed = value
    if isinstance(parsed, dict) and "systolic" in parsed and "diastolic" in parsed:
        value = f"{parsed['systolic']}/{parsed['diastolic']}"
    unit = metric.get("unit")
    recorded = str(metric.get("recordedAt", ""))[:10]
    return f"{value}{(' ' + unit) if unit else ''} (recorded {recorded})"


def fallback_health_response(
    message: str,
    user: Dict[str, Any],
    records: List[Dict[str, Any]],
    metrics: List[Dict[str, Any]],
    appointments: Optional[List[Dict[str, Any]]] = None,
) -> str:
    msg = message.lower()
    appointments = appointments or []

    if "allerg" in msg:
        if user.get("allergies"):
            answer = f"Your profile lists these allergies: {user['allergies']}. Always tell healthcare providers about them before any treatment."
        else:
            answer = "You have no allergies recorded in your profile. You can add them on the emergency information page."
    elif "blood pressure" in msg or "hypertension" in msg:
        metric = _latest_metric(metrics, "blood_pressure")
        if metric:
            answer = f"Your most recent blood pressure reading was {_describe_metric(metric)}."
        else:
            answer = "I couldn't find any blood pressure readings in your health metrics."
    elif "sugar" in msg or "glucose" in msg:
        metric = _latest_metric(metrics, "blood_sugar")
        if metric:
            answer = f"Your most recent blood sugar reading was {_describe_metric(metric)}."
        else:
            answer = "I couldn't find any blood sugar readings in your health metrics."
    elif "heart" in msg or "pulse" in msg:
        metric = _latest_metric(metrics, "heart_rate")
        if metric:
            answer = f"Your most recent heart rate reading was {_describe_metric(metric)}."
        else:
            answer = "I couldn't find any heart rate readings in your health metrics."
    elif "weight" in msg or "bmi" in msg:
        metric = _latest_metric(metrics, "weight")
        if metric:
            answer = f"Your most recent weight reading was {_describe_metric(metric)}."
        else:
            answer = "I couldn't find any weight readings in your health metrics."
    elif "appointment" in msg or "doctor" in msg or "visit" in msg:
        if appointments:
            listed = "; ".join(
                f"{a.get('title')} with {a.get('providerName')} on {str(a.get('appointmentDate', ''))[:16].replace('T', ' ')}"
                for a in appointments
            )
            answer = f"Your upcoming appointments: {listed}."
        else:
            answer = "You don't have any upcoming appointments scheduled."
    elif "condition" in msg or "diagnos" in msg:
        if user.get("chronicConditions"):
            answer = f"Your profile lists these chronic conditions: {user['chronicConditions']}."
        else:
            answer = "You have no chronic conditions recorded in your profile."
    elif "record" in msg or "report" in msg or "document" in msg:
        if records:
            titles = ", ".join(str(r.get("title")) for r in records[:5])
            answer = f"You have {len(records)} medical record(s) stored, including: {titles}."
        else:
            answer = "You haven't uploaded any medical records yet."
    elif re.search(r"\b(hi|hello|hey)\b", msg):
        name = user.get("fullName") or "there"
        return (
            f"Hello {name}! I'm your MediKey AI Assistant. I can help answer questions about your "
            "health records, metrics or upcoming appointments. How can I assist you today?"
        )
    else:
        answer = (
            "I can help answer questions about your health records, metrics, allergies or upcoming "
            "appointments. Try asking 'What was my last blood pressure reading?'"
        )
    return f"{answer} {DISCLAIMER}"


async def generate_health_response(
    message: str,
    user: Dict[str, Any],
    medical_records: Optional[List[Dict[str, Any]]] = None,
    health_metrics: Optional[List[Dict[str, Any]]] = None,
    appointments: Optional[List[Dict[str, Any]]] = None,
) -> str:
    """Answer an assistant question using the user's stored data as context"""
    medical_records = medical_records or []
    health_metrics = health_metrics or []
    if client is None:
        return fallback_health_response(message, user, medical_records, health_metrics, appointments)

    prompt = f"""
You are an AI Health Assistant for a medical records application. Answer the user's question based on their health context.
Be helpful, clear, and accurate, but never claim to provide medical advice. Suggest consulting healthcare providers for medical decisions.
If you don't have specific information to answer a question about their health, say so clearly rather than making up information.

User's health context:
User: {json.dumps(user, indent=2, default=str)}
Medical Records: {json.dumps(medical_records, indent=2, default=str)}
Health Metrics: {json.dumps(health_metrics, indent=2, default=str)}
Upcoming Appointments: {json.dumps(appointments or [], indent=2, default=str)}

User question: {message}
"""
    try:
        content = await _complete("generate_health_response", prompt, temperature=0.5, max_tokens=500)
        return content or "I apologize, but I'm unable to provide a response at the moment. Please try again later."
    except openai.OpenAIError as e:
        logger.error(f"Error generating health response: {e}")
        if is_quota_error(e):
            return f"I apologize, but {QUOTA_MESSAGE[0].lower()}{QUOTA_MESSAGE[1:]}"
        return APOLOGY_MESSAGE


# --- Document analysis ---

BP_PATTERN = re.compile(r"(\d{2,3})\s*/\s*(\d{2,3})\s*mm\s*hg", re.IGNORECASE)
HR_PATTERN = re.compile(r"(\d{2,3})\s*bpm", re.IGNORECASE)
TEMP_PATTERN = re.compile(r"(\d{2,3}(?:\.\d)?)\s*°?\s*([CF])\b")
MEDICATION_PATTERN = re.compile(r"\b\d+(?:\.\d+)?\s*(?:mg|mcg|ml|units?)\b", re.IGNORECASE)


def empty_analysis() -> Dict[str, Any]:
    return {
        "diagnoses": [],
        "medications": [],
        "vitalSigns": {},
        "recommendations": [],
        "keyFindings": [],
    }


def fallback_document_analysis(text: str) -> Dict[str, Any]:
    """Pattern-based extraction used when no client is configured"""
    analysis = empty_analysis()
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        lower = line.lower()
        if "diagnos" in lower or "impression" in lower:
            analysis["diagnoses"].append(line)
        if MEDICATION_PATTERN.search(line):
            analysis["medications"].append(line)
        if "recommend" in lower or "follow-up" in lower or "follow up" in lower:
            analysis["recommendations"].append(line)
        if "finding" in lower or "result" in lower or "abnormal" in lower:
            analysis["keyFindings"].append(line)

    vitals = analysis["vitalSigns"]
    bp = BP_PATTERN.search(text)
    if bp:
        vitals["bloodPressure"] = f"{bp.group(1)}/{bp.group(2)} mmHg"
    hr = HR_PATTERN.search(text)
    if hr:
        vitals["heartRate"] = f"{hr.group(1)} bpm"
    temp = TEMP_PATTERN.search(text)
    if temp:
        vitals["temperature"] = f"{temp.group(1)}°{temp.group(2).upper()}"
    return analysis


async def analyze_medical_document(document_text: str) -> Dict[str, Any]:
    """
    Extract diagnoses, medications, vital signs, recommendations and key
    findings from a document. Always returns every key.
    """
    if client is None:
        return fallback_document_analysis(document_text)

    prompt = f"""
Please analyze this medical document and extract key information in JSON format with these fields:
- diagnoses: Array of diagnoses mentioned
- medications: Array of medications mentioned with dosages if available
- vitalSigns: Object with any vital signs mentioned (BP, heart rate, etc.)
- recommendations: Array of recommendations or follow-up steps
- keyFindings: Array of important findings

Document:
{document_text}
"""
    analysis = empty_analysis()
    try:
        content = await _complete(
            "analyze_medical_document",
            prompt,
            temperature=0.2,
            response_format={"type": "json_object"},
        )
        parsed = json.loads(content or "{}")
    except openai.OpenAIError as e:
        logger.error(f"Error analyzing medical document: {e}")
        if is_quota_error(e):
            analysis["diagnoses"] = ["AI service unavailable due to quota limits"]
        else:
            analysis["diagnoses"] = ["Unable to analyze diagnoses"]
        analysis["recommendations"] = ["Please try again later"]
        return analysis
    except ValueError as e:
        logger.error(f"OpenAI returned invalid JSON for document analysis: {e}")
        analysis["recommendations"] = ["Please try again later"]
        return analysis

    if isinstance(parsed, dict):
        for key, default in empty_analysis().items():
            value = parsed.get(key, default)
            analysis[key] = value if isinstance(value, type(default)) else default
    return analysis
