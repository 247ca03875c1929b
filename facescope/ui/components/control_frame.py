import customtkinter as ctk


class ControlFrame(ctk.CTkFrame):
    def __init__(self, master, callbacks):
        super().__init__(master)

        self.start_camera_button = ctk.CTkButton(
            self,
            text="Start Camera",
            command=callbacks['start_camera'],
            font=("Helvetica", 14)
        )
        self.start_camera_button.pack(pady=10, padx=20, fill="x")

    def disable(self):
        self.start_camera_button.configure(state="disabled")

    def enable(self):
        self.start_camera_button.configure(state="normal")
