# app.py
# Currency Converter (Gradio)
# Rates come from api.exchangerate-api.com (USD base, no API key) and are
# refreshed in the background every 5 minutes.

import gradio as gr

import settings
from conversion import (
    ConverterState,
    SetAmount,
    SetSource,
    SetTarget,
    Swap,
    ToggleDarkMode,
    currency_choices,
    flag_url,
    format_rate,
    format_result,
    reduce,
    sync_with_store,
)
from logging_setup import get_logger
from rate_store import RateStore
from refresh_timer import RefreshTimer

log = get_logger(__name__)

TOGGLE_DARK_JS = "() => { document.body.classList.toggle('dark'); }"


def _flag_html(code):
    if not code:
        return ""
    return f'<img src="{flag_url(code)}" alt="{code}" width="24" height="18">'


def render(state: ConverterState):
    """Map a state snapshot to the values of every output component."""
    codes = currency_choices(state.rates)
    return (
        state,
        gr.update(choices=codes, value=state.source),
        gr.update(choices=codes, value=state.target),
        _flag_html(state.source),
        _flag_html(state.target),
        gr.update(value=state.error, visible=bool(state.error)),
        format_result(state),
        format_rate(state),
        "☀️ Light Mode" if state.dark_mode else "🌙 Dark Mode",
    )


def build_demo(store: RateStore) -> gr.Blocks:
    with gr.Blocks(title="Currency Converter") as demo:
        state = gr.State(ConverterState())

        with gr.Row():
            gr.Markdown("# 💱 Currency Converter")
            dark_btn = gr.Button("🌙 Dark Mode", size="sm")
        error_box = gr.Markdown(visible=False)
        with gr.Row():
            amount = gr.Number(value=settings.DEFAULT_AMOUNT, label="Amount")
        with gr.Row():
            with gr.Column():
                from_dd = gr.Dropdown(choices=[], value=settings.DEFAULT_SOURCE, label="From",
                                      allow_custom_value=True)
                from_flag = gr.HTML(_flag_html(settings.DEFAULT_SOURCE))
            swap_btn = gr.Button("↔️ Swap")
            with gr.Column():
                to_dd = gr.Dropdown(choices=[], value=settings.DEFAULT_TARGET, label="To",
                                    allow_custom_value=True)
                to_flag = gr.HTML(_flag_html(settings.DEFAULT_TARGET))
        refresh_btn = gr.Button("Refresh Rates", variant="primary")
        result_box = gr.Textbox(label="Converted Amount", interactive=False)
        info_box = gr.Textbox(label="Rate / Info", interactive=False)
        timer = gr.Timer(settings.UI_SYNC_SECS)

        outputs = [state, from_dd, to_dd, from_flag, to_flag, error_box, result_box, info_box, dark_btn]

        def on_sync(s):
            return render(sync_with_store(s, store))

        def on_amount(s, value):
            return render(reduce(sync_with_store(s, store), SetAmount(value)))

        def on_from(s, code):
            return render(reduce(sync_with_store(s, store), SetSource(code)))

        def on_to(s, code):
            return render(reduce(sync_with_store(s, store), SetTarget(code)))

        def on_swap(s):
            return render(reduce(sync_with_store(s, store), Swap()))

        def on_refresh(s):
            store.refresh()
            return render(sync_with_store(s, store))

        def on_toggle_dark(s):
            return render(reduce(s, ToggleDarkMode()))

        demo.load(on_sync, [state], outputs)
        timer.tick(on_sync, [state], outputs)
        amount.input(on_amount, [state, amount], outputs)
        from_dd.input(on_from, [state, from_dd], outputs)
        to_dd.input(on_to, [state, to_dd], outputs)
        swap_btn.click(on_swap, [state], outputs)
        refresh_btn.click(on_refresh, [state], outputs)
        dark_btn.click(None, None, None, js=TOGGLE_DARK_JS)
        dark_btn.click(on_toggle_dark, [state], outputs)

    return demo


def main():
    store = RateStore()
    demo = build_demo(store)
    with RefreshTimer(store.refresh):
        demo.launch()


if __name__ == "__main__":
    main()
