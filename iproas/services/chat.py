# iproas/services/chat.py
# -----------------------------------------------------------------------------
# Chat assistant proxy (OpenAI-compatible chat completions, Groq by default)
# - system prompt + optional calculator snapshot + conversation
# - streams content deltas back, framed as Server-Sent Events by sse_events()
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
from typing import AsyncIterator, Dict, Optional, Sequence

import httpx
from loguru import logger

from iproas.core.config import settings
from iproas.schemas.chat import ChatMessage

SYSTEM_PROMPT = """Eres un asistente experto en la metodología IP-ROAS. Siempre respondes en español.

## Fórmulas que dominas:

- **IP-ROAS** = 1 + (TF + IE) / IP
- **VUM** = ⌈(TF + IP + IE) / m*⌉ donde m* = min(μᵢ × pᵢ) (margen absoluto mínimo del portafolio)
- **ROAS_min_tradicional** = (p* × VUM) / IP
- **CPR** = IP / VUM

Donde:
- IP = Inversión Publicitaria (presupuesto negociado con el cliente)
- TF = Tarifa Fija (fee de la agencia)
- IE = Ingreso Esperado (utilidad objetivo de la agencia)
- VUM = Ventas de Utilidad Mínima (unidades mínimas a vender)
- m* = margen absoluto mínimo del portafolio (precio × margen bruto del producto crítico)
- p* = precio del producto con margen mínimo
- CPR = Costo Por Resultado

## Tus capacidades:

1. **Guiar paso a paso**: explicas cómo usar la calculadora IP-ROAS, qué inputs poner y qué significa cada campo.
2. **Interpretar resultados**: cuando recibes los valores actuales de la calculadora, explicas qué significan para el negocio del usuario.
3. **Recomendar acciones**: según los resultados, sugieres si ajustar IP, TF, IE o mejorar márgenes del portafolio.

## Reglas:
- Responde siempre en español.
- Sé conciso pero claro.
- Usa las fórmulas cuando sea relevante para respaldar tus explicaciones.
- Si el usuario tiene datos cargados en la calculadora, úsalos para dar respuestas personalizadas.
- Si no hay datos cargados, guía al usuario para que empiece a usar la calculadora."""

DONE = "[DONE]"


def _auth_headers() -> Dict[str, str]:
    if not settings.GROQ_API_KEY:
        raise RuntimeError("GROQ_API_KEY is not configured")
    return {"Authorization": f"Bearer {settings.GROQ_API_KEY}"}


def ensure_configured() -> None:
    _auth_headers()


def build_payload(messages: Sequence[ChatMessage], context: Optional[str] = None) -> dict:
    system = [{"role": "system", "content": SYSTEM_PROMPT}]
    if context:
        system.append(
            {
                "role": "system",
                "content": f"## Datos actuales de la calculadora del usuario:\n{context}",
            }
        )
    return {
        "model": settings.GROQ_MODEL,
        "messages": system + [{"role": m.role, "content": m.content} for m in messages],
        "stream": True,
        "temperature": settings.CHAT_TEMPERATURE,
        "max_tokens": settings.CHAT_MAX_TOKENS,
    }


def parse_delta(line: str) -> Optional[str]:
    """
    One upstream SSE line -> content fragment.
    Returns DONE at end of stream, None for keep-alives/empty deltas.
    """
    if not line.startswith("data:"):
        return None
    data = line[len("data:"):].strip()
    if data == DONE:
        return DONE
    chunk = json.loads(data)
    choices = chunk.get("choices") or []
    if not choices:
        return None
    return (choices[0].get("delta") or {}).get("content") or None


async def stream_chat(
    messages: Sequence[ChatMessage],
    context: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[str]:
    headers = _auth_headers()
    payload = build_payload(messages, context)
    timeout = httpx.Timeout(connect=6.0, read=30.0, write=10.0, pool=6.0)

    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=timeout)
    try:
        async with client.stream(
            "POST", settings.GROQ_API_URL, json=payload, headers=headers
        ) as r:
            r.raise_for_status()
            async for line in r.aiter_lines():
                fragment = parse_delta(line)
                if fragment == DONE:
                    break
                if fragment:
                    yield fragment
    finally:
        if own_client:
            await client.aclose()


def _event(payload: dict) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def sse_events(fragments: AsyncIterator[str]) -> AsyncIterator[str]:
    """Frame fragments as SSE; ends with [DONE] or a single error frame."""
    try:
        async for fragment in fragments:
            yield _event({"content": fragment})
    except httpx.TimeoutException as e:
        logger.warning(f"[chat] upstream timeout: {e}")
        yield _event({"error": "Error en el streaming"})
        return
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"[chat] upstream error: {e}")
        yield _event({"error": "Error en el streaming"})
        return
    yield f"data: {DONE}\n\n"
