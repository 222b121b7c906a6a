"""Built-in sample rows served when the feedback source is unreachable."""

from typing import List

from feedback_intel.models.record import FeedbackRecord

SAMPLE_ROWS = (
    {
        "id": 12, "video_marca": "Nubank", "video_tema": "Roxinho Cashback",
        "video_formato": "BC", "video_versao": "V3", "comment_author": "Marina Souza",
        "comment_text": "A trilha ainda está alta demais no final.",
        "ai_summary": "Reduzir volume da trilha nos segundos finais.",
        "ai_category_topic": '["Audio"]', "ai_action_category": "Ajuste",
        "status": "pending", "sentiment": "neutral",
        "video_file": "nubank_cashback_v3.mp4", "created_at": "2024-05-14T16:20:00",
    },
    {
        "id": 11, "video_marca": "Nubank", "video_tema": "Roxinho Cashback",
        "video_formato": "BC", "video_versao": "V2", "comment_author": "Marina Souza",
        "comment_text": "O roxo da cartela está puxando para o azul.",
        "ai_summary": "Corrigir cor da cartela final para o roxo da marca.",
        "ai_category_topic": '["Color", "Branding"]', "ai_action_category": "Correção",
        "status": "resolved", "sentiment": "negative",
        "video_file": "nubank_cashback_v2.mp4", "created_at": "2024-05-13T10:05:00",
    },
    {
        "id": 10, "video_marca": "Nubank", "video_tema": "Ultravioleta",
        "video_formato": "BCR", "video_versao": "V1", "comment_author": "Caio Lima",
        "comment_text": "Gostei muito do ritmo, só revisar a legenda.",
        "ai_summary": "Revisar ortografia da legenda.",
        "ai_category_topic": '["Text"]', "ai_action_category": "Ajuste",
        "status": "in-review", "sentiment": "positive",
        "video_file": "nubank_uv_v1.mp4", "created_at": "2024-05-13T09:40:00",
    },
    {
        "id": 9, "video_marca": "Coca-Cola", "video_tema": "Verão Sempre",
        "video_formato": "BC", "video_versao": "V4", "comment_author": "Renata Alves",
        "comment_text": "Trocar o plano da praia por um mais aberto.",
        "ai_summary": "Substituir plano da praia por enquadramento aberto.",
        "ai_category_topic": '["Edit"]', "ai_action_category": "Correção",
        "status": "pending", "sentiment": "neutral",
        "video_file": "coca_verao_v4.mp4", "created_at": "2024-05-12T18:30:00",
    },
    {
        "id": 8, "video_marca": "Coca-Cola", "video_tema": "Verão Sempre",
        "video_formato": "BC", "video_versao": "V3", "comment_author": "Renata Alves",
        "comment_text": "O logo some rápido demais.",
        "ai_summary": "Aumentar tempo de tela do logo.",
        "ai_category_topic": '["Branding"]', "ai_action_category": "Ajuste",
        "status": "resolved", "sentiment": "negative",
        "video_file": "coca_verao_v3.mp4", "created_at": "2024-05-10T11:00:00",
    },
    {
        "id": 7, "video_marca": "Coca-Cola", "video_tema": "Natal Coca",
        "video_formato": "BCR", "video_versao": "V1", "comment_author": "Pedro Martins",
        "comment_text": "Ficou lindo, aprovado pela diretoria.",
        "ai_summary": "Peça aprovada sem ajustes.",
        "ai_category_topic": "", "ai_action_category": "Aprovação",
        "status": "resolved", "sentiment": "positive",
        "video_file": "coca_natal_v1.mp4", "created_at": "2024-05-10T09:15:00",
    },
    {
        "id": 6, "video_marca": "Itaú", "video_tema": "Feito de Futuro",
        "video_formato": "BC", "video_versao": "V2", "comment_author": "Juliana Rocha",
        "comment_text": "A locução precisa ser mais calorosa.",
        "ai_summary": "Regravar locução com tom mais caloroso.",
        "ai_category_topic": '["Audio", "Voice"]', "ai_action_category": "Correção",
        "status": "in-review", "sentiment": "neutral",
        "video_file": "itau_futuro_v2.mp4", "created_at": "2024-05-09T14:45:00",
    },
    {
        "id": 5, "video_marca": "Itaú", "video_tema": "Feito de Futuro",
        "video_formato": "BC", "video_versao": "V1", "comment_author": "Juliana Rocha",
        "comment_text": "Legenda cobrindo o rosto do ator no segundo 12.",
        "ai_summary": "Reposicionar legenda no segundo 12.",
        "ai_category_topic": "not-json", "ai_action_category": "Ajuste",
        "status": "resolved", "sentiment": "negative",
        "video_file": "itau_futuro_v1.mp4", "created_at": "2024-05-08T17:10:00",
    },
)


def sample_records() -> List[FeedbackRecord]:
    return [FeedbackRecord.from_dict(row) for row in SAMPLE_ROWS]
