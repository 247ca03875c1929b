import customtkinter as ctk


class StatsFrame(ctk.CTkFrame):
    def __init__(self, master):
        super().__init__(master)

        self.fps_label = ctk.CTkLabel(
            self,
            text="FPS: ...",
            font=("Helvetica", 14)
        )
        self.fps_label.pack(pady=6)

        self.resolution_label = ctk.CTkLabel(
            self,
            text="Resolution: unknown",
            font=("Helvetica", 14)
        )
        self.resolution_label.pack(pady=6)

    def update_stats(self, fps, frame_size):
        if fps is not None:
            self.fps_label.configure(text=f"FPS: {fps:.2f}")
        if frame_size is not None:
            self.resolution_label.configure(text=f"Resolution: {frame_size[0]} x {frame_size[1]}")
