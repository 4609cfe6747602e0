"""
LangChain prompt templates for the daily summary.

The model only ever sees placeholder names (pracownik_1, pracownik_2, ...);
the prompt asks it to keep them unchanged so they can be swapped back.
"""

from langchain_core.prompts import ChatPromptTemplate

SUMMARY_SYSTEM_PROMPT = """\
Jesteś pomocnym asystentem, który generuje zwięzłe podsumowania zadań."""

SUMMARY_HUMAN_PROMPT = """\
Stwórz bardzo krótkie (maks. {max_chars} znaków), zwięzłe podsumowanie dziennych zadań. Podsumowanie ma być w języku polskim i nadawać się do wysłania SMS-em.
Skup się na przypisaniu zadań konkretnym osobom.
Podaj dzień tygodnia, w którym mają być realizowane zadania.

WAŻNE
Nie zmieniaj składni nazw pracownik_1, pracownik_2. W Twojej odpowiedzi zawsze trzymaj się podanej formy.

Oto dane:
Dzień tygodnia: {day_of_week}
Data: {date}
Zadania: {tasks}

Podsumowanie:"""

# Upper bound on summary length requested from the model (one SMS)
SUMMARY_MAX_CHARS = 160


def get_summary_prompt() -> ChatPromptTemplate:
    """Get the daily summary prompt template.

    Variables:
        day_of_week: Polish weekday name (e.g., "środa")
        date: Date in YYYY-MM-DD form
        tasks: JSON object mapping placeholders to task descriptions
        max_chars: Maximum summary length in characters

    Returns:
        ChatPromptTemplate configured for the daily summary
    """
    return ChatPromptTemplate.from_messages([
        ("system", SUMMARY_SYSTEM_PROMPT),
        ("human", SUMMARY_HUMAN_PROMPT),
    ])
