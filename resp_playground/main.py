import html
import logging
from typing import Optional, Tuple

import gradio as gr

from .config import PlaygroundConfig, setup_logging
from .examples import DEFAULT_EXAMPLE, EXAMPLES, SAMPLE_REPLIES
from .formatter import LEGEND
from .resp_interceptor import RESPInterceptor

logger = logging.getLogger("resp_playground")


class RESPPlayground:
	def __init__(self, config: Optional[PlaygroundConfig] = None):
		self.config = config or PlaygroundConfig()
		self.resp_interceptor = RESPInterceptor(self.config.decoder_limits())

	def encode_commands(self, command: str) -> Tuple[str, str, str]:
		"""Encode command(s) and return labeled HTML, escaped wire text and copyable wire text"""
		views = self.resp_interceptor.format_requests(command)
		if not views:
			return '<span class="resp-placeholder">Enter a command above</span>', "", ""

		all_html = []
		all_display = []
		for i, view in enumerate(views):
			# Add a header per command when there are several
			if len(views) > 1:
				all_html.append(f'<div class="resp-command">=== Command {i+1}: {html.escape(view.command)} ===</div>')
			all_html.append(view.html)
			all_display.append(view.display)

		copy_text = "".join(view.copy_text for view in views)
		return "\n".join(all_html), "\n".join(all_display), copy_text

	def decode_reply(self, text: str) -> Tuple[str, str]:
		"""Decode escaped wire text and return labeled HTML and the redis-cli style result"""
		if not text.strip():
			return '<span class="resp-placeholder">Paste RESP bytes above, e.g. +OK\\r\\n</span>', ""
		view = self.resp_interceptor.decode_escaped(text)
		return view.html, view.result


def legend_markdown() -> str:
	items = " · ".join(f"`{prefix}` {name}" for prefix, name, _ in LEGEND)
	return f"**Legend:** {items}"


def create_ui(playground: RESPPlayground):
	"""Create the Gradio UI"""

	# Custom CSS for better styling
	css = """
	.resp-section {
		font-family: 'Courier New', monospace;
		background: #2d3748;
		color: #e2e8f0;
		padding: 12px;
		border-radius: 6px;
		white-space: pre-wrap;
		min-height: 120px;
	}
	.resp-line { display: flex; gap: 8px; }
	.resp-crlf { color: #718096; }
	.resp-label { color: #a0aec0; font-style: italic; margin-left: auto; }
	.resp-array { color: #f6ad55; }
	.resp-bulk { color: #63b3ed; }
	.resp-simple { color: #68d391; }
	.resp-error { color: #fc8181; }
	.resp-integer { color: #b794f4; }
	.resp-data { color: #e2e8f0; }
	.resp-failure { color: #1a202c; background: #fc8181; padding: 0 4px; border-radius: 3px; }
	.resp-command { color: #f6e05e; margin-top: 8px; }
	.resp-placeholder { color: #718096; }
	"""

	first = EXAMPLES[DEFAULT_EXAMPLE]
	initial_html, initial_display, initial_copy = playground.encode_commands(first["command"])

	with gr.Blocks(css=css, title="RESP Playground 🔌", theme=gr.themes.Default(), fill_width=True) as demo: #type: ignore

		gr.Markdown("""
		# 🔌 Interactive RESP Encoder

		Enter a Redis command to see how it's encoded in the RESP (REdis Serialization Protocol).
		Every command travels as an array of bulk strings; each `\\r\\n` below is a real CR LF pair on the wire.
		""")

		with gr.Row():
			# Left column - Examples Explorer
			with gr.Column(scale=1):
				gr.Markdown("## 📚 Examples")

				example_dropdown = gr.Dropdown(
					choices=list(EXAMPLES.keys()),
					label="🎯 Select an example",
					value=DEFAULT_EXAMPLE
				)

				example_info = gr.Markdown(value=first["description"])
				example_command = gr.Code(
					value=first["command"],
					language="shell",
					label="💡 Example Usage"
				)

				try_example_btn = gr.Button("🚀 Try This Example", variant="secondary")

			# Right column - Encoder
			with gr.Column(scale=1):
				gr.Markdown("## 🖥️ Command")

				command_input = gr.Textbox(
					label="💻 Command(s)",
					value=first["command"],
					placeholder="Enter a Redis command...\nExample: SET mykey Hello",
					lines=3
				)

				with gr.Tabs():
					with gr.TabItem("📨 RESP Encoding"):
						resp_request = gr.HTML(value=initial_html, elem_classes=["resp-section"])

					with gr.TabItem("🧾 Raw"):
						resp_raw = gr.Code(
							value=initial_display,
							label="📤 Escaped wire format",
							lines=4
						)
						resp_copy = gr.Textbox(
							value=initial_copy,
							label="📋 Copy (real CR LF bytes)",
							lines=4,
							interactive=False,
							show_copy_button=True
						)

		# Quick examples, one button per preset
		gr.Markdown("## ⚡ Quick Commands")
		with gr.Row():
			quick_btns = []
			for label, example in EXAMPLES.items():
				btn = gr.Button(label, size="sm")
				quick_btns.append((btn, example["command"]))

		# Decoder section
		gr.Markdown("## 📬 Decode a Reply")
		with gr.Row():
			with gr.Column(scale=1):
				reply_input = gr.Textbox(
					label="📥 RESP bytes (write CR LF as \\r\\n)",
					placeholder="*2\\r\\n$3\\r\\nfoo\\r\\n:42\\r\\n",
					lines=3
				)
				decode_btn = gr.Button("⚡ Decode", variant="primary")
				with gr.Row():
					reply_btns = []
					for label, reply in SAMPLE_REPLIES.items():
						btn = gr.Button(label, size="sm")
						reply_btns.append((btn, reply))

			with gr.Column(scale=1):
				reply_lines = gr.HTML(elem_classes=["resp-section"])
				reply_result = gr.Textbox(label="📋 Result", lines=4, interactive=False)

		gr.Markdown(legend_markdown())

		# Event handlers
		def update_example_info(selected):
			if selected in EXAMPLES:
				example = EXAMPLES[selected]
				return example["description"], example["command"]
			return "", ""

		def set_command(command):
			return command

		# Wire up events
		example_dropdown.change(
			update_example_info,
			inputs=[example_dropdown],
			outputs=[example_info, example_command]
		)

		try_example_btn.click(
			lambda name: EXAMPLES[name]["command"] if name in EXAMPLES else "",
			inputs=[example_dropdown],
			outputs=[command_input]
		)

		# Re-encode on every edit
		command_input.change(
			playground.encode_commands,
			inputs=[command_input],
			outputs=[resp_request, resp_raw, resp_copy]
		)

		decode_btn.click(
			playground.decode_reply,
			inputs=[reply_input],
			outputs=[reply_lines, reply_result]
		)

		reply_input.submit(
			playground.decode_reply,
			inputs=[reply_input],
			outputs=[reply_lines, reply_result]
		)

		for btn, cmd in quick_btns:
			btn.click(set_command, inputs=[gr.State(cmd)], outputs=[command_input])

		for btn, reply in reply_btns:
			btn.click(set_command, inputs=[gr.State(reply)], outputs=[reply_input])

	return demo


def launch(config: Optional[PlaygroundConfig] = None):
	config = config or PlaygroundConfig()
	demo = create_ui(RESPPlayground(config))
	logger.info(f"RESP playground listening on {config.host}:{config.port}")
	demo.launch(
		server_name=config.host,
		server_port=config.port,
		share=config.share,
		show_error=True
	)


if __name__ == "__main__":
	config = PlaygroundConfig()
	setup_logging(config.loglevel)
	launch(config)
