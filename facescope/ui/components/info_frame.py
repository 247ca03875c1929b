import customtkinter as ctk

COLOR_ERROR = "#f87171"
COLOR_LOADING = "#facc15"
COLOR_MUTED = "gray60"


class InfoFrame(ctk.CTkFrame):
    def __init__(self, master):
        super().__init__(master)

        self.labels = []
        for _ in range(3):
            label = ctk.CTkLabel(self, text="", font=("Helvetica", 16))
            label.pack(pady=8)
            self.labels.append(label)

    def show(self, lines, kind="info"):
        """Show up to three lines; ``kind`` is info, error, loading or empty"""
        color = {
            "error": COLOR_ERROR,
            "loading": COLOR_LOADING,
            "empty": COLOR_MUTED,
        }.get(kind)

        for index, label in enumerate(self.labels):
            text = lines[index] if index < len(lines) else ""
            if color:
                label.configure(text=text, text_color=color)
            else:
                label.configure(text=text, text_color=("gray10", "gray90"))
